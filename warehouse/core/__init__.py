"""
==============================================================================
Core Package
==============================================================================

Core utilities shared by the inventory and the services.

Modules:
--------
- exceptions: WarehouseError family and error factory functions
- security: SecurityManager for password hashing

Usage:
------
    from warehouse.core import WarehouseError, InsufficientStock
    from warehouse.core import exceptions

    raise exceptions.category_not_found("Tools")

==============================================================================
"""

from .exceptions import (
    WarehouseError,
    NotFound,
    InsufficientStock,
    EmptyCollection,
    DuplicateCategory,
    CategoryNotEmpty,
    InvalidInput,
)
from .security import SecurityManager, get_security_manager

__all__ = [
    # Exceptions
    "WarehouseError",
    "NotFound",
    "InsufficientStock",
    "EmptyCollection",
    "DuplicateCategory",
    "CategoryNotEmpty",
    "InvalidInput",
    # Security
    "SecurityManager",
    "get_security_manager",
]
