"""
==============================================================================
Utilities Package
==============================================================================

Utility classes for the application.

Modules:
--------
- validators: Bounded name and quantity validation
- report_writer: Report file generation

==============================================================================
"""

from .validators import BoundedNameValidator, QuantityValidator, NAME_MAX_LENGTH, NAME_PATTERN

__all__ = [
    "BoundedNameValidator",
    "QuantityValidator",
    "NAME_MAX_LENGTH",
    "NAME_PATTERN",
]
