"""
==============================================================================
Inventory Report Module
==============================================================================

Deterministic text renderings of the inventory.

Reports:
-------
- Products report: every product sorted ascending by product_id (stable,
  so products sharing an id keep their collection order)
- Analysis report: totals, max/min and the low/high stock partitions
- Category listing: every category in order followed by its products

==============================================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from warehouse.core import exceptions

from .analysis import AnalysisResult
from .category_index import CategoryIndex
from .models import Product
from .products import ProductCollection


PRODUCTS_REPORT_HEADER = "Product ID, Product Name, Product Quantity, Product Category"


def sort_by_product_id(products: Iterable[Product]) -> List[Product]:
    """Stable ascending sort by product_id."""
    return sorted(products, key=lambda product: product.product_id)


def format_products_report(
    products: ProductCollection,
    category: Optional[str] = None
) -> str:
    """
    Render the products list sorted by id.

    Args:
        products: Collection to render; it is not reordered
        category: Category name, only used for error details

    Returns:
        Header line followed by one ``id, name, quantity, category`` line per product

    Raises:
        EmptyCollection: If there is nothing to report
    """
    if not products:
        raise exceptions.empty_collection(category)

    lines = [PRODUCTS_REPORT_HEADER]
    for product in sort_by_product_id(products):
        lines.append(
            f"{product.product_id}, {product.name}, {product.quantity}, {product.category}"
        )

    return "\n".join(lines)


def format_analysis_report(result: AnalysisResult) -> str:
    """Render an AnalysisResult."""
    lines = [
        f"Total quantity: {result.total_quantity}",
        f"Average quantity: {result.average_quantity:.2f}",
        f"Max stock product ID: {result.max_product.product_id}, "
        f"Quantity: {result.max_product.quantity}",
        f"Min stock product ID: {result.min_product.product_id}, "
        f"Quantity: {result.min_product.quantity}",
        "Low stock products:",
    ]

    for product in result.low_stock:
        lines.append(f"Product ID: {product.product_id}, Quantity: {product.quantity}")

    lines.append("High stock products:")
    for product in result.high_stock:
        lines.append(f"Product ID: {product.product_id}, Quantity: {product.quantity}")

    return "\n".join(lines)


def format_category_listing(index: CategoryIndex) -> str:
    """Render all categories in ascending order with their products."""
    lines = []

    for node in index.traverse_inorder():
        lines.append(f"Category: {node.name}")
        for product in node.products:
            lines.append(
                f"  Product ID: {product.product_id}, Name: {product.name}, "
                f"Quantity: {product.quantity}"
            )

    if not lines:
        return "No categories."

    return "\n".join(lines)
