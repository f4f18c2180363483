"""
==============================================================================
Product Collection Module
==============================================================================

Singly linked product sequence owned by one category.

Ordering Contract:
-----------------
- insert() always prepends, so iteration yields the most recent insert first
- no uniqueness check on product_id; find() returns the most recent match
- quantity changes mutate the stored Product in place

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from warehouse.core import exceptions
from warehouse.utils.validators import QuantityValidator

from .models import Product


# Module logger
logger = logging.getLogger(__name__)


class _Link:
    """One cell of the linked sequence."""

    __slots__ = ("product", "next")

    def __init__(self, product: Product, next_link: Optional["_Link"] = None) -> None:
        self.product = product
        self.next = next_link


class ProductCollection:
    """
    Prepend-only linked collection of products.

    Attributes:
        _head: First link (most recently inserted product)
        _size: Number of links

    Example:
        >>> products = ProductCollection()
        >>> products.insert(1, "Hammer", 10, "Tools")
        >>> products.insert(2, "Wrench", 4, "Tools")
        >>> [p.product_id for p in products]
        [2, 1]
        >>> products.decrease_quantity(1, 3).quantity
        7
    """

    def __init__(self) -> None:
        self._head: Optional[_Link] = None
        self._size = 0
        self._quantity_validator = QuantityValidator()

    @classmethod
    def from_products(cls, products: Iterable[Product]) -> "ProductCollection":
        """
        Build a collection that iterates in the same order as ``products``.

        The records are linked, not copied.
        """
        collection = cls()
        for product in reversed(list(products)):
            collection.push(product)
        return collection

    # =========================================================================
    # SEQUENCE PROTOCOL
    # =========================================================================

    def __iter__(self) -> Iterator[Product]:
        link = self._head
        while link is not None:
            yield link.product
            link = link.next

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        return f"ProductCollection(size={self._size})"

    @property
    def head(self) -> Optional[Product]:
        """Most recently inserted product, or None when empty."""
        return self._head.product if self._head else None

    def is_empty(self) -> bool:
        return self._head is None

    # =========================================================================
    # INSERTION
    # =========================================================================

    def push(self, product: Product) -> Product:
        """Link an existing record at the front."""
        self._head = _Link(product, self._head)
        self._size += 1
        return product

    def insert(
        self,
        product_id: int,
        name: str,
        quantity: int,
        category: str = ""
    ) -> Product:
        """
        Create a product and prepend it.

        Duplicate ids are allowed; the new record shadows older ones on lookup.

        Returns:
            The newly created Product
        """
        product = Product(
            product_id=product_id,
            name=name,
            quantity=quantity,
            category=category
        )
        return self.push(product)

    def extend_front(self, other: "ProductCollection") -> int:
        """
        Move every product of ``other`` in front of this collection.

        ``other``'s order is kept and it is left empty.

        Returns:
            Number of products moved
        """
        moved = other.detach()
        for product in reversed(moved):
            self.push(product)
        return len(moved)

    def detach(self) -> List[Product]:
        """Empty the collection and return its products in order."""
        products = list(self)
        self._head = None
        self._size = 0
        return products

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find(self, product_id: int) -> Optional[Product]:
        """
        Linear scan from the head; first match wins.

        Returns:
            Product or None
        """
        for product in self:
            if product.product_id == product_id:
                return product
        return None

    def get(self, product_id: int) -> Product:
        """
        Find a product or fail.

        Raises:
            NotFound: PRODUCT_NOT_FOUND if no product has this id
        """
        product = self.find(product_id)
        if product is None:
            raise exceptions.product_not_found(product_id)
        return product

    def __contains__(self, product_id: object) -> bool:
        return isinstance(product_id, int) and self.find(product_id) is not None

    # =========================================================================
    # QUANTITY MUTATION
    # =========================================================================

    def set_quantity(self, product_id: int, new_quantity: int) -> Product:
        """
        Overwrite the quantity of a product, unguarded.

        Args:
            product_id: Product to update
            new_quantity: Any integer, negative values included

        Returns:
            The updated Product

        Raises:
            NotFound: PRODUCT_NOT_FOUND if no product has this id
        """
        product = self.get(product_id)
        product.quantity = new_quantity
        logger.debug(f"Product {product_id} quantity set to {new_quantity}")
        return product

    def decrease_quantity(self, product_id: int, amount: int) -> Product:
        """
        Decrease a product's quantity without letting it go negative.

        Args:
            product_id: Product to update
            amount: Non-negative number of units to remove

        Returns:
            The updated Product

        Raises:
            InvalidInput: If amount is negative
            NotFound: PRODUCT_NOT_FOUND if no product has this id
            InsufficientStock: If amount exceeds the current quantity
        """
        is_valid, error = self._quantity_validator.validate(amount)
        if not is_valid:
            raise exceptions.invalid_input("amount", error or "Invalid")

        product = self.get(product_id)

        if product.quantity < amount:
            raise exceptions.insufficient_stock(product_id, product.quantity, amount)

        product.quantity -= amount
        logger.debug(f"Product {product_id} decreased by {amount} to {product.quantity}")
        return product

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def total_quantity(self) -> int:
        """Sum of all quantities."""
        return sum(product.quantity for product in self)
