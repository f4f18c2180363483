"""
==============================================================================
Storage Package
==============================================================================

Flat-file persistence for the inventory.

==============================================================================
"""

from .product_file import ProductFileStore

__all__ = ["ProductFileStore"]
