"""
==============================================================================
Inventory Service Module
==============================================================================

Service driving the category index for the menu and other callers.

This module implements:
- InventoryService: one method per inventory operation

Result Handling:
---------------
The inventory structures raise WarehouseError subclasses. Every public
method here catches them and returns an OperationResult, logging one line
for the operation as a whole:

    ┌──────────────┐      ┌──────────────────┐      ┌─────────────────┐
    │   Caller     │ ───▶ │ InventoryService │ ───▶ │  CategoryIndex  │
    └──────────────┘      └────────┬─────────┘      └────────┬────────┘
           ▲                       │   WarehouseError        │
           │  OperationResult      ◀─────────────────────────┘
           └───────────────────────┘

Lookups:
-------
Category-scoped operations resolve the category once and act on the node
they found. Stock updates without a category search the categories in
ascending order and act on the first one holding the product id.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, Union

from pydantic import ValidationError

from warehouse.config import get_settings
from warehouse.core import exceptions
from warehouse.core.exceptions import WarehouseError
from warehouse.inventory import (
    CategoryIndex,
    CategoryNode,
    DeletePolicy,
    Product,
    ProductCollection,
    analyze_products,
    format_analysis_report,
    format_category_listing,
    format_products_report,
)
from warehouse.schemas.common import OperationResult
from warehouse.storage import ProductFileStore
from warehouse.utils.report_writer import ReportWriter
from warehouse.utils.validators import BoundedNameValidator


# Module logger
logger = logging.getLogger(__name__)


class InventoryService:
    """
    Service for category and product operations.

    Attributes:
        _index: Category index being driven
        _delete_policy: Default policy for category deletion
        _product_name_validator: Bounded product name check

    Example:
        >>> service = InventoryService()
        >>> service.add_category("Tools").success
        True
        >>> service.add_product("Tools", 1, "Hammer", 10).message
        'Product added successfully.'
        >>> service.decrease_stock(1, 20).code
        'INSUFFICIENT_STOCK'
    """

    def __init__(
        self,
        index: Optional[CategoryIndex] = None,
        delete_policy: Union[DeletePolicy, str, None] = None
    ) -> None:
        """
        Initialize the inventory service.

        Args:
            index: Category index to drive (a new empty one if None)
            delete_policy: Default delete policy (settings if None)
        """
        self._index = index if index is not None else CategoryIndex()
        self._delete_policy = DeletePolicy(
            delete_policy or get_settings().category_delete_policy
        )
        self._product_name_validator = BoundedNameValidator("product name")

    @property
    def index(self) -> CategoryIndex:
        return self._index

    @property
    def delete_policy(self) -> DeletePolicy:
        return self._delete_policy

    # =========================================================================
    # RESULT HANDLING
    # =========================================================================

    def _execute(
        self,
        action: str,
        operation: Callable[[], OperationResult]
    ) -> OperationResult:
        """Run an operation, turning WarehouseError into a failed result."""
        try:
            result = operation()
        except WarehouseError as e:
            logger.warning(f"{action} failed: [{e.code}] {e.message}")
            return OperationResult.failure(e)

        logger.info(f"{action}: {result.message}")
        return result

    # =========================================================================
    # CATEGORY OPERATIONS
    # =========================================================================

    def add_category(self, name: str) -> OperationResult:
        """
        Add a category.

        An existing name is a no-op reported as DUPLICATE_CATEGORY.
        """
        def operation() -> OperationResult:
            node, created = self._index.insert(name)
            if not created:
                raise exceptions.duplicate_category(node.name)
            return OperationResult.ok(f"Category '{node.name}' added successfully.", node)

        return self._execute("Add category", operation)

    def delete_category(
        self,
        name: str,
        policy: Union[DeletePolicy, str, None] = None,
        transfer_to: Optional[str] = None
    ) -> OperationResult:
        """
        Delete a category under the given (or default) policy.

        The result data is the ProductCollection removed with the category.
        """
        def operation() -> OperationResult:
            try:
                chosen = DeletePolicy(policy or self._delete_policy)
            except ValueError:
                raise exceptions.invalid_input(
                    "delete policy", f"unknown policy '{policy}'"
                ) from None

            removed = self._index.delete(name, policy=chosen, transfer_to=transfer_to)

            message = f"Category '{name.strip()}' deleted successfully."
            if chosen is DeletePolicy.TRANSFER:
                message += f" Products moved to '{transfer_to.strip()}'."
            elif removed:
                message += f" {len(removed)} product(s) discarded."

            return OperationResult.ok(message, removed)

        return self._execute("Delete category", operation)

    def list_categories(self) -> OperationResult:
        """Category names in ascending order."""
        names = self._index.names()
        return OperationResult.ok(f"{len(names)} categories", names)

    # =========================================================================
    # PRODUCT OPERATIONS
    # =========================================================================

    def add_product(
        self,
        category: str,
        product_id: int,
        name: str,
        quantity: int
    ) -> OperationResult:
        """Prepend a product to an existing category."""
        def operation() -> OperationResult:
            is_valid, normalized, error = self._product_name_validator.validate(name)
            if not is_valid:
                raise exceptions.invalid_input("product name", error or "Invalid")

            node = self._index.get(category)
            product = self._build(lambda: node.add_product(product_id, normalized, quantity))
            return OperationResult.ok("Product added successfully.", product)

        return self._execute("Add product", operation)

    def find_product(self, product_id: int, category: Optional[str] = None) -> OperationResult:
        """Look up a product, in one category or across all of them."""
        def operation() -> OperationResult:
            _, product = self._locate(product_id, category)
            return OperationResult.ok(f"Product {product_id} found.", product)

        return self._execute("Find product", operation)

    def update_stock(
        self,
        product_id: int,
        quantity: int,
        category: Optional[str] = None
    ) -> OperationResult:
        """Overwrite a product's quantity (unguarded)."""
        def operation() -> OperationResult:
            node, _ = self._locate(product_id, category)
            product = self._build(lambda: node.products.set_quantity(product_id, quantity))
            return OperationResult.ok(f"Product quantity updated to {quantity}.", product)

        return self._execute("Update stock", operation)

    def decrease_stock(
        self,
        product_id: int,
        amount: int,
        category: Optional[str] = None
    ) -> OperationResult:
        """Decrease a product's quantity; fails without mutation on low stock."""
        def operation() -> OperationResult:
            node, _ = self._locate(product_id, category)
            product = node.products.decrease_quantity(product_id, amount)
            return OperationResult.ok(
                f"Decreased quantity by {amount}. New quantity: {product.quantity}",
                product
            )

        return self._execute("Decrease stock", operation)

    def _locate(
        self,
        product_id: int,
        category: Optional[str]
    ) -> Tuple[CategoryNode, Product]:
        """Single lookup of the category node and product to act on."""
        if category is not None:
            node = self._index.get(category)
            product = node.products.find(product_id)
            if product is None:
                raise exceptions.product_not_found(product_id, node.name)
            return node, product

        located = self._index.find_product(product_id)
        if located is None:
            raise exceptions.product_not_found(product_id)
        return located

    @staticmethod
    def _build(create: Callable[[], Product]) -> Product:
        """Run a Product constructor/assignment, mapping pydantic errors."""
        try:
            return create()
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise exceptions.invalid_input(fields, "value rejected") from None

    # =========================================================================
    # ANALYSIS AND REPORTS
    # =========================================================================

    def _products_for(self, category: Optional[str]) -> ProductCollection:
        if category is None:
            return self._index.all_products()
        return self._index.get(category).products

    def analyze(self, category: Optional[str] = None) -> OperationResult:
        """
        Stock analysis of one category, or of the whole inventory.

        The result data is the AnalysisResult.
        """
        def operation() -> OperationResult:
            result = analyze_products(self._products_for(category), category)
            return OperationResult.ok(
                f"Analysed {result.product_count} products.", result
            )

        return self._execute("Analyze products", operation)

    def analysis_report(self, category: Optional[str] = None) -> OperationResult:
        """Rendered analysis report; data is the report text."""
        def operation() -> OperationResult:
            result = analyze_products(self._products_for(category), category)
            return OperationResult.ok("Analysis report generated.", format_analysis_report(result))

        return self._execute("Analysis report", operation)

    def products_report(self, category: Optional[str] = None) -> OperationResult:
        """Products report sorted by id; data is the report text."""
        def operation() -> OperationResult:
            report = format_products_report(self._products_for(category), category)
            return OperationResult.ok("Products report generated.", report)

        return self._execute("Products report", operation)

    def display(self) -> str:
        """All categories and their products."""
        return format_category_listing(self._index)

    def write_report(
        self,
        kind: str,
        report: OperationResult,
        writer: Optional[ReportWriter] = None
    ) -> OperationResult:
        """Write a successful report result to a file; data is the file path."""
        if not report.success:
            return report

        path = (writer or ReportWriter()).write(kind, report.data)
        return OperationResult.ok(f"Report written to {path}", path)

    def get_stats(self) -> OperationResult:
        """Inventory statistics."""
        stats = {
            "categories": len(self._index),
            "products": 0,
            "total_quantity": 0,
            "height": self._index.height(),
            "per_category": {},
        }

        for node in self._index.traverse_inorder():
            count = len(node.products)
            stats["products"] += count
            stats["total_quantity"] += node.products.total_quantity()
            stats["per_category"][node.name] = count

        return OperationResult.ok(
            f"{stats['categories']} categories, {stats['products']} products", stats
        )

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def import_products(self, store: ProductFileStore) -> OperationResult:
        """
        Load the product file into the index.

        Each product goes to the category named by its tag, created on
        demand. Products are inserted in file order. A malformed file
        imports nothing.
        """
        def operation() -> OperationResult:
            try:
                loaded = store.load()
            except FileNotFoundError:
                raise exceptions.invalid_input("products file", f"{store.path} not found") from None

            records = list(loaded)
            records.reverse()

            category_validator = BoundedNameValidator("category name")
            for product in records:
                is_valid, _, error = category_validator.validate(product.category)
                if not is_valid:
                    raise exceptions.invalid_input("category name", error or "Invalid")

            created_categories = 0
            for product in records:
                node, created = self._index.insert(product.category)
                created_categories += int(created)
                node.add_product(product.product_id, product.name, product.quantity)

            return OperationResult.ok(
                f"Imported {len(records)} products into "
                f"{len(self._index)} categories ({created_categories} new).",
                len(records)
            )

        return self._execute("Import products", operation)

    def save_products(self, store: ProductFileStore) -> OperationResult:
        """Append every product in the index to the product file."""
        def operation() -> OperationResult:
            written = store.save(self._index.all_products())
            return OperationResult.ok(f"Saved {written} products to {store.path}.", written)

        return self._execute("Save products", operation)
