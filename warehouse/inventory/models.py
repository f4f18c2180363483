"""
==============================================================================
Product Models Module
==============================================================================

Pydantic model for the product record held by a category.

==============================================================================
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from warehouse.utils.validators import NAME_MAX_LENGTH, NAME_PATTERN


class Product(BaseModel):
    """
    Product record stored in a category's product collection.

    Quantity is mutated in place. It is only guarded against going negative
    by the decrease path; a direct set accepts any integer.

    Attributes:
        product_id: Caller-assigned identifier, unique per category by convention
        name: Product display name
        quantity: Units in stock
        category: Category tag (denormalized copy of the owning category name)
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    product_id: int = Field(..., description="Product identifier")
    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        pattern=NAME_PATTERN,
        description="Product name"
    )
    quantity: int = Field(default=0, description="Units in stock")
    category: str = Field(
        default="",
        max_length=NAME_MAX_LENGTH,
        pattern=NAME_PATTERN,
        description="Category tag"
    )

    def as_record(self) -> Tuple[int, str, int, str]:
        """Return the persisted (id, name, quantity, category) tuple."""
        return (self.product_id, self.name, self.quantity, self.category)
