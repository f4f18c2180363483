"""
Warehouse Exception Handling

One exception family for every recoverable inventory condition. The data
structures raise these; the service layer turns them into result values.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class WarehouseError(Exception):
    """
    Base exception for all inventory error scenarios.

    Provides a consistent error payload across the inventory operations.

    Usage:
        raise WarehouseError("Category not found", "CATEGORY_NOT_FOUND")
        raise InsufficientStock("Not enough stock", "INSUFFICIENT_STOCK",
                                {"current": 3, "requested": 5})

    Error Codes:
        Lookup:
            - CATEGORY_NOT_FOUND
            - PRODUCT_NOT_FOUND

        Stock:
            - INSUFFICIENT_STOCK

        Analysis / Report:
            - EMPTY_COLLECTION

        Category Index:
            - DUPLICATE_CATEGORY
            - CATEGORY_NOT_EMPTY

        Input:
            - INVALID_INPUT
            - MALFORMED_RECORD
    """

    default_code = "WAREHOUSE_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize warehouse exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a plain dictionary."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class NotFound(WarehouseError):
    """Category or product absent."""

    default_code = "NOT_FOUND"


class InsufficientStock(WarehouseError):
    """Decrease exceeds the current quantity."""

    default_code = "INSUFFICIENT_STOCK"


class EmptyCollection(WarehouseError):
    """Analysis or report requested over zero products."""

    default_code = "EMPTY_COLLECTION"


class DuplicateCategory(WarehouseError):
    """Insert of a category that already exists."""

    default_code = "DUPLICATE_CATEGORY"


class CategoryNotEmpty(WarehouseError):
    """Delete refused because the category still holds products."""

    default_code = "CATEGORY_NOT_EMPTY"


class InvalidInput(WarehouseError):
    """Bad caller input or a malformed persisted record."""

    default_code = "INVALID_INPUT"


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def category_not_found(name: str) -> NotFound:
    """Create category not found exception."""
    return NotFound(
        f"Category '{name}' does not exist",
        "CATEGORY_NOT_FOUND",
        {"category": name}
    )


def product_not_found(product_id: int, category: Optional[str] = None) -> NotFound:
    """Create product not found exception."""
    details: Dict[str, Any] = {"product_id": product_id}
    if category is not None:
        details["category"] = category
    return NotFound(
        f"No product with ID {product_id}",
        "PRODUCT_NOT_FOUND",
        details
    )


def insufficient_stock(product_id: int, current: int, requested: int) -> InsufficientStock:
    """Create insufficient stock exception."""
    return InsufficientStock(
        f"Not enough stock to decrease by {requested}. Current stock: {current}",
        "INSUFFICIENT_STOCK",
        {"product_id": product_id, "current": current, "requested": requested}
    )


def empty_collection(category: Optional[str] = None) -> EmptyCollection:
    """Create empty collection exception."""
    details = {"category": category} if category else {}
    return EmptyCollection("No products to analyze", "EMPTY_COLLECTION", details)


def duplicate_category(name: str) -> DuplicateCategory:
    """Create duplicate category exception."""
    return DuplicateCategory(
        f"Category '{name}' already exists",
        "DUPLICATE_CATEGORY",
        {"category": name}
    )


def category_not_empty(name: str, product_count: int) -> CategoryNotEmpty:
    """Create category not empty exception."""
    return CategoryNotEmpty(
        f"Category '{name}' still holds {product_count} product(s)",
        "CATEGORY_NOT_EMPTY",
        {"category": name, "product_count": product_count}
    )


def invalid_input(field: str, reason: str) -> InvalidInput:
    """Create invalid input exception."""
    return InvalidInput(
        f"Invalid {field}: {reason}",
        "INVALID_INPUT",
        {"field": field, "reason": reason}
    )


def malformed_record(line_number: int, line: str, reason: str) -> InvalidInput:
    """Create malformed persistence record exception."""
    return InvalidInput(
        f"Malformed product record on line {line_number}: {reason}",
        "MALFORMED_RECORD",
        {"line_number": line_number, "line": line, "reason": reason}
    )
