"""
==============================================================================
Warehouse Management System - Application Entry Point
==============================================================================

Interactive menu over the in-process inventory:
- Login against the superadmin account or the users file
- Warehouse temperature and climate control banner
- Category and product management, stock analysis and reports

Usage:
------
    # Console script installed with the package
    warehouse

    # Or as a module
    python -m warehouse.main

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from warehouse.config import Settings, get_settings
from warehouse.inventory import DeletePolicy
from warehouse.schemas.common import OperationResult
from warehouse.services import (
    AuthService,
    ClimateAdvisor,
    InventoryService,
    TemperatureService,
)
from warehouse.storage import ProductFileStore


# Module logger
logger = logging.getLogger(__name__)

DEFAULT_SUPERADMIN_PASSWORD = Settings.model_fields["superadmin_password"].default


# ============================================================================
# LOGGING SETUP
# ============================================================================

def configure_logging(settings: Settings) -> None:
    """Root logging configuration for the console application."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


# ============================================================================
# APPLICATION
# ============================================================================

class Application:
    """
    Interactive warehouse menu.

    Handles the session lifecycle:
    - Product file import at start-up
    - Login
    - Climate banner
    - Menu loop until Exit or end of input

    Input and output are injectable so the menu can be driven by tests.
    """

    MENU_TITLE = "Warehouse Management System Menu:"
    MENU_OPTIONS = (
        "1. Add Category",
        "2. Delete Category",
        "3. Add Product to a Category",
        "4. Update Product Stock",
        "5. Decrease Product Stock",
        "6. Display All Categories and Products",
        "7. Analyze Products",
        "8. Print Products list",
        "9. Exit",
    )
    EXIT_CHOICE = 9

    def __init__(
        self,
        settings: Optional[Settings] = None,
        inventory: Optional[InventoryService] = None,
        auth: Optional[AuthService] = None,
        temperature: Optional[TemperatureService] = None,
        advisor: Optional[ClimateAdvisor] = None,
        product_store: Optional[ProductFileStore] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        """Initialize the application; collaborators default from settings."""
        self._settings = settings or get_settings()
        self._inventory = inventory or InventoryService()
        self._auth = auth or AuthService()
        self._temperature = temperature or TemperatureService(self._settings)
        self._advisor = advisor or ClimateAdvisor(self._settings)
        self._product_store = product_store or ProductFileStore(self._settings.products_path)
        self._input = input_func
        self._output = output_func

        self._handlers: Dict[int, Callable[[], None]] = {
            1: self._add_category,
            2: self._delete_category,
            3: self._add_product,
            4: self._update_stock,
            5: self._decrease_stock,
            6: self._display,
            7: self._analyze,
            8: self._print_products,
        }

    @property
    def inventory(self) -> InventoryService:
        return self._inventory

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def run(self) -> int:
        """
        Run one interactive session.

        Returns:
            Process exit code: 0 after Exit or end of input, 1 on failed login
        """
        self._startup()

        try:
            if not self._login():
                self._say("Login failed. Invalid username or password.")
                return 1

            self._say("Login successful!")
            self._show_climate()
            self._menu_loop()
        except EOFError:
            logger.info("Input closed, leaving menu")

        self._say("Exiting...")
        return 0

    def _startup(self) -> None:
        """Import the product file when present."""
        logger.info(f"🚀 Starting {self._settings.app_name}")

        if not self._product_store.exists():
            logger.warning(f"⚠️ Products file not found: {self._product_store.path}")
        else:
            result = self._inventory.import_products(self._product_store)
            if not result.success:
                logger.error(f"❌ Failed to import products: {result.message}")

        stats = self._inventory.get_stats()
        logger.info(f"✅ {self._settings.app_name} ready: {stats.message}")

    def _login(self) -> bool:
        username = self._input("Enter username: ")
        password = self._input("Enter password: ")
        return self._auth.login(username, password)

    def _show_climate(self) -> None:
        advice = self._advisor.advise(self._temperature.get_reading())
        self._say(advice.banner())

    # =========================================================================
    # MENU LOOP
    # =========================================================================

    def _menu_loop(self) -> None:
        while True:
            self._say("")
            self._say(self.MENU_TITLE)
            for option in self.MENU_OPTIONS:
                self._say(option)

            choice = self._prompt_int("Enter your choice: ")

            if choice == self.EXIT_CHOICE:
                return

            handler = self._handlers.get(choice) if choice is not None else None
            if handler is None:
                self._say("Invalid choice. Please try again.")
                continue

            handler()

    # =========================================================================
    # MENU ACTIONS
    # =========================================================================

    def _add_category(self) -> None:
        name = self._input("Enter category name: ")
        self._report(self._inventory.add_category(name))

    def _delete_category(self) -> None:
        name = self._input("Enter category name to delete: ")
        transfer_to = None
        if self._inventory.delete_policy is DeletePolicy.TRANSFER:
            transfer_to = self._input("Enter category to receive its products: ")
        self._report(self._inventory.delete_category(name, transfer_to=transfer_to))

    def _add_product(self) -> None:
        self._say("Existing Categories:")
        self._say(self._inventory.display())

        category = self._input("Enter category name where to add product: ")
        product_id = self._prompt_int("Enter product ID: ")
        name = self._input("Enter product name: ")
        quantity = self._prompt_int("Enter quantity: ")

        if product_id is None or quantity is None:
            self._say("Product ID and quantity must be whole numbers.")
            return

        result = self._inventory.add_product(category, product_id, name, quantity)
        if result.code == "CATEGORY_NOT_FOUND":
            self._say("Category does not exist. Please create the category first.")
            return
        self._report(result)

    def _update_stock(self) -> None:
        product_id = self._prompt_int("Enter product ID to update stock: ")
        quantity = self._prompt_int("Enter new quantity: ")

        if product_id is None or quantity is None:
            self._say("Product ID and quantity must be whole numbers.")
            return

        self._report(self._inventory.update_stock(product_id, quantity))

    def _decrease_stock(self) -> None:
        product_id = self._prompt_int("Enter product ID to decrease stock: ")
        amount = self._prompt_int("Enter quantity to decrease: ")

        if product_id is None or amount is None:
            self._say("Product ID and quantity must be whole numbers.")
            return

        self._report(self._inventory.decrease_stock(product_id, amount))

    def _display(self) -> None:
        self._say("All Categories and Products:")
        self._say(self._inventory.display())

    def _analyze(self) -> None:
        category = self._prompt_category()
        self._say("Analysis Report:")
        self._show_report("analysis", self._inventory.analysis_report(category))

    def _print_products(self) -> None:
        category = self._prompt_category()
        self._say("Inventory List:")
        self._show_report("products", self._inventory.products_report(category))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _show_report(self, kind: str, report: OperationResult) -> None:
        if not report.success:
            self._say(report.message)
            return

        self._say(report.data)

        answer = self._input("Save report to file? [y/N]: ")
        if answer.strip().lower() in {"y", "yes"}:
            self._report(self._inventory.write_report(kind, report))

    def _prompt_category(self) -> Optional[str]:
        category = self._input("Enter category name (blank for all categories): ").strip()
        return category or None

    def _prompt_int(self, prompt: str) -> Optional[int]:
        raw = self._input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            return None

    def _report(self, result: OperationResult) -> None:
        self._say(result.message)

    def _say(self, text: str) -> None:
        self._output(text)


# ============================================================================
# CONSOLE ENTRY POINT
# ============================================================================

def main() -> int:
    """Console script entry point."""
    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and settings.superadmin_password == DEFAULT_SUPERADMIN_PASSWORD:
        logger.warning("⚠️ Default superadmin password in use in production")

    return Application(settings=settings).run()


if __name__ == "__main__":
    raise SystemExit(main())
