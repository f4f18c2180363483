"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides isolated settings, inventory structures and service fixtures.

==============================================================================
"""

import pytest
from pathlib import Path
from typing import Generator

from warehouse.config import get_settings
from warehouse.inventory import CategoryIndex, ProductCollection
from warehouse.services import InventoryService


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run every test in a temp directory with file settings pointing into it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("USERS_FILE", str(tmp_path / "user.txt"))
    monkeypatch.setenv("PRODUCTS_FILE", str(tmp_path / "products.txt"))
    monkeypatch.setenv("REPORT_DIRECTORY", str(tmp_path / "reports"))
    monkeypatch.setenv("WEATHER_API_KEY", "")
    monkeypatch.delenv("CATEGORY_DELETE_POLICY", raising=False)

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


# ============================================================================
# INVENTORY FIXTURES
# ============================================================================

@pytest.fixture
def index() -> CategoryIndex:
    """Index built from Bolts, Tools, Anvils (Bolts at the root)."""
    index = CategoryIndex()
    for name in ["Bolts", "Tools", "Anvils"]:
        index.insert(name)
    return index


@pytest.fixture
def stocked_collection() -> ProductCollection:
    """Collection with quantities 10, 20, 30 in iteration order."""
    products = ProductCollection()
    products.insert(3, "Crowbar", 30, "Tools")
    products.insert(2, "Wrench", 20, "Tools")
    products.insert(1, "Hammer", 10, "Tools")
    return products


@pytest.fixture
def service() -> InventoryService:
    """Inventory service over an empty index."""
    return InventoryService()


@pytest.fixture
def stocked_service(service: InventoryService) -> InventoryService:
    """Service with Tools (ids 1, 2) and Bolts (id 7)."""
    service.add_category("Tools")
    service.add_category("Bolts")
    service.add_product("Tools", 1, "Hammer", 10)
    service.add_product("Tools", 2, "Wrench", 4)
    service.add_product("Bolts", 7, "Hex Bolt M8", 250)
    return service
