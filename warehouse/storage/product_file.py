"""
==============================================================================
Product File Module
==============================================================================

Flat-file persistence for products.

File Format:
-----------
One product per line, comma separated, no header:

    id,name,quantity,category
    1,Hammer,10,Tools
    7,Hex Bolt M8,250,Bolts

Blank lines are ignored. Any other line that does not hold exactly four
fields, integer id and quantity, and bounded name/category is rejected
with a MALFORMED_RECORD error naming the line number.

==============================================================================
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Union

from pydantic import ValidationError

from warehouse.core import exceptions
from warehouse.inventory.models import Product
from warehouse.inventory.products import ProductCollection


# Module logger
logger = logging.getLogger(__name__)


FIELD_COUNT = 4


class ProductFileStore:
    """
    Load and append products in the flat product file.

    Attributes:
        _path: Product file location

    Example:
        >>> store = ProductFileStore(Path("products.txt"))
        >>> products = store.load()
        >>> store.save(products)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self) -> ProductCollection:
        """
        Read every product into one flat collection.

        Products are prepended in file order, so the collection lists the
        last line first.

        Returns:
            ProductCollection

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidInput: MALFORMED_RECORD for the first bad line, for text
                that is not UTF-8, or for a line the csv reader refuses
        """
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            logger.error(f"Products file not found: {self._path}")
            raise

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            line_number = raw.count(b"\n", 0, e.start) + 1
            bad_line = raw.split(b"\n")[line_number - 1].decode("utf-8", errors="replace")
            raise exceptions.malformed_record(
                line_number, bad_line, "line is not valid UTF-8 text"
            ) from None

        products = ProductCollection()
        reader = csv.reader(io.StringIO(text, newline=""))

        try:
            for row in reader:
                if not row or all(not field.strip() for field in row):
                    continue
                products.push(self._parse_row(reader.line_num, row))
        except csv.Error as e:
            raise exceptions.malformed_record(reader.line_num, "", str(e)) from None

        logger.info(f"✅ Loaded {len(products)} products from {self._path}")
        return products

    @staticmethod
    def _parse_row(line_number: int, row: list) -> Product:
        """Turn one csv row into a Product or raise MALFORMED_RECORD."""
        raw_line = ",".join(row)

        if len(row) != FIELD_COUNT:
            raise exceptions.malformed_record(
                line_number,
                raw_line,
                f"expected {FIELD_COUNT} fields, found {len(row)}"
            )

        raw_id, name, raw_quantity, category = (field.strip() for field in row)

        if not category:
            raise exceptions.malformed_record(line_number, raw_line, "category is empty")

        try:
            product_id = int(raw_id)
            quantity = int(raw_quantity)
        except ValueError:
            raise exceptions.malformed_record(
                line_number, raw_line, "id and quantity must be integers"
            ) from None

        try:
            return Product(
                product_id=product_id,
                name=name,
                quantity=quantity,
                category=category
            )
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise exceptions.malformed_record(
                line_number, raw_line, f"invalid {fields}"
            ) from None

    # =========================================================================
    # SAVING
    # =========================================================================

    def save(self, products: Iterable[Product]) -> int:
        """
        Append products to the file, creating it if needed.

        Args:
            products: Products to write, in iteration order

        Returns:
            Number of lines written
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        written = 0

        with self._path.open("a", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            for product in products:
                writer.writerow(product.as_record())
                written += 1

        logger.info(f"✅ Saved {written} products to {self._path}")
        return written
