"""
==============================================================================
Stock Analysis Module
==============================================================================

Aggregate statistics over a product collection.

Algorithm:
---------
Pass 1 walks the collection once for total, count, max and min (the first
product wins ties). The average is total / count as a float. Pass 2
partitions against the average:

    quantity <  average  →  copy front-inserted into low_stock
    quantity >  average  →  copy front-inserted into high_stock
    quantity == average  →  neither

Front insertion means both partitions list products in reverse source order.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from warehouse.core import exceptions

from .models import Product
from .products import ProductCollection


# Module logger
logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    """
    Result of one stock analysis.

    low_stock and high_stock hold independent copies of the qualifying
    products. max_product and min_product are the records stored in the
    analysed collection, not copies.

    Attributes:
        low_stock: Copies of products below the average
        high_stock: Copies of products above the average
        max_product: Product with the highest quantity
        min_product: Product with the lowest quantity
        total_quantity: Sum of all quantities
        average_quantity: total_quantity / product count
        product_count: Number of products analysed
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    low_stock: ProductCollection
    high_stock: ProductCollection
    max_product: Product
    min_product: Product
    total_quantity: int
    average_quantity: float
    product_count: int = Field(ge=1)


def analyze_products(
    products: ProductCollection,
    category: Optional[str] = None
) -> AnalysisResult:
    """
    Compute stock statistics and the low/high partitions.

    Args:
        products: Collection to analyse; it is not modified
        category: Category name, only used for error details

    Returns:
        AnalysisResult

    Raises:
        EmptyCollection: If the collection holds no products

    Example:
        >>> result = analyze_products(products)    # quantities 10, 20, 30
        >>> result.average_quantity
        20.0
        >>> [p.quantity for p in result.low_stock]
        [10]
    """
    total = 0
    count = 0
    max_product: Optional[Product] = None
    min_product: Optional[Product] = None

    for product in products:
        total += product.quantity
        count += 1
        if max_product is None or product.quantity > max_product.quantity:
            max_product = product
        if min_product is None or product.quantity < min_product.quantity:
            min_product = product

    if count == 0 or max_product is None or min_product is None:
        raise exceptions.empty_collection(category)

    average = total / count

    low_stock = ProductCollection()
    high_stock = ProductCollection()

    for product in products:
        if product.quantity < average:
            low_stock.push(product.model_copy())
        elif product.quantity > average:
            high_stock.push(product.model_copy())

    logger.debug(
        f"Analysed {count} products: total={total}, average={average:.2f}, "
        f"low={len(low_stock)}, high={len(high_stock)}"
    )

    return AnalysisResult(
        low_stock=low_stock,
        high_stock=high_stock,
        max_product=max_product,
        min_product=min_product,
        total_quantity=total,
        average_quantity=average,
        product_count=count,
    )
