"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from warehouse.config import get_settings, Settings

    settings = get_settings()
    print(settings.products_file)
    print(settings.category_delete_policy)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
