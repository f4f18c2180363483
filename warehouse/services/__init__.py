"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes between the interactive menu and the inventory structures.

This package provides:
- InventoryService: Category and product operations, reports, persistence
- AuthService: Credential check and user registration
- TemperatureService / ClimateAdvisor: Warehouse temperature and climate advice

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────┐
    │   Menu / CLI    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Result values, logging
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ Category Index  │  ← Data structures, raise WarehouseError
    └─────────────────┘

==============================================================================
"""

from .inventory_service import InventoryService
from .auth_service import AuthService
from .climate_service import (
    ClimateAction,
    ClimateAdvice,
    ClimateAdvisor,
    TemperatureReading,
    TemperatureService,
)

__all__ = [
    "InventoryService",
    "AuthService",
    "ClimateAction",
    "ClimateAdvice",
    "ClimateAdvisor",
    "TemperatureReading",
    "TemperatureService",
]
