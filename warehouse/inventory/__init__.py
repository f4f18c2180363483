"""
==============================================================================
Inventory Package - Category Index and Stock Analysis
==============================================================================

In-process inventory: categories in a binary search tree, each owning a
linked collection of products.

Classes:
--------
- Product: Pydantic model for product records
- ProductCollection: Prepend-only linked product sequence
- CategoryIndex / CategoryNode: Ordered category tree
- AnalysisResult: Stock statistics and low/high partitions

==============================================================================
"""

from .models import Product
from .products import ProductCollection
from .category_index import CategoryIndex, CategoryNode, DeletePolicy
from .analysis import AnalysisResult, analyze_products
from .report import (
    PRODUCTS_REPORT_HEADER,
    format_analysis_report,
    format_category_listing,
    format_products_report,
)

__all__ = [
    "Product",
    "ProductCollection",
    "CategoryIndex",
    "CategoryNode",
    "DeletePolicy",
    "AnalysisResult",
    "analyze_products",
    "format_analysis_report",
    "format_category_listing",
    "format_products_report",
    "PRODUCTS_REPORT_HEADER",
]
