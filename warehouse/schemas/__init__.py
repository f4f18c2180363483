"""
==============================================================================
Schemas Package
==============================================================================

Result models shared by the services and the menu.

==============================================================================
"""

from .common import OperationResult

__all__ = ["OperationResult"]
