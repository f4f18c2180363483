"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for inventory input data.

This module implements:
- BoundedNameValidator: Validates category and product names
- QuantityValidator: Validates stock change amounts

Validation Rules for Names:
--------------------------
- Length: 1-49 characters after trimming surrounding whitespace
- No commas or line breaks (they would corrupt the product file)
- Case is preserved; category ordering is case-sensitive

==============================================================================
"""

from __future__ import annotations

import re
from typing import Optional, Tuple


# Longest accepted category or product name
NAME_MAX_LENGTH = 49

# Names may not contain commas or line breaks
NAME_PATTERN = r"^[^,\r\n]*$"


class BoundedNameValidator:
    """
    Validator for category names and product names.

    Example:
        >>> validator = BoundedNameValidator("category")
        >>> is_valid, normalized, error = validator.validate("  Tools ")
        >>> print(normalized)
        'Tools'
    """

    FORBIDDEN = re.compile(r"[,\r\n]")

    MIN_LENGTH = 1
    MAX_LENGTH = NAME_MAX_LENGTH

    def __init__(self, field: str = "name") -> None:
        self.field = field

    def validate(self, name: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate and normalize a name.

        Args:
            name: Raw name input

        Returns:
            Tuple of (is_valid, normalized_name, error_message)
            - If valid: (True, "Normalized", None)
            - If invalid: (False, None, "Error description")
        """
        if name is None:
            return False, None, f"{self.field} is required"

        name = name.strip()

        if len(name) < self.MIN_LENGTH:
            return False, None, f"{self.field} cannot be empty"

        if len(name) > self.MAX_LENGTH:
            return False, None, f"{self.field} must be at most {self.MAX_LENGTH} characters"

        if self.FORBIDDEN.search(name):
            return False, None, f"{self.field} cannot contain commas or line breaks"

        return True, name, None


class QuantityValidator:
    """
    Validator for stock change amounts.
    """

    def validate(self, qty: int) -> Tuple[bool, Optional[str]]:
        """
        Validate an amount used to decrease stock.

        Args:
            qty: Amount to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if isinstance(qty, bool) or not isinstance(qty, int):
            return False, "Quantity must be an integer"

        if qty < 0:
            return False, "Quantity cannot be negative"

        return True, None
