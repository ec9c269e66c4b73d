"""
==============================================================================
Product Catalog Module
==============================================================================

Product Catalog Store: keyed product lookup over the products table.

Features:
---------
- Exact barcode lookup used by the scan ingestion pipeline
- Product CRUD for the catalog endpoints
- Bulk loading from a JSON file for sample data

JSON Structure:
--------------
[
  {"barcode": "8901234567890", "name": "...", "brand": "...", "calories": 120, ...},
  ...
]

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import Session

from barcode_inventory.core import exceptions
from barcode_inventory.db.database import commit_or_translate
from barcode_inventory.db.models import Product
from .models import DEFAULT_PLACEHOLDER_IMAGE, ProductCreate, ProductUpdate


# Module logger
logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Product catalog backed by the relational store.

    Example:
        >>> catalog = ProductCatalog(db_session)
        >>> product = catalog.find_by_barcode("8901234567890")
        >>> catalog.update("8901234567890", ProductUpdate(calories=125))
    """

    def __init__(self, db: Session, placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE) -> None:
        """
        Initialize the catalog.

        Args:
            db: SQLAlchemy database session
            placeholder_image: Image URI for products created without one
        """
        self._db = db
        self._placeholder_image = placeholder_image

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find_by_barcode(self, barcode: str) -> Optional[Product]:
        """Find product by exact barcode, or None."""
        return self._db.get(Product, barcode)

    def get(self, barcode: str) -> Product:
        """
        Get product by barcode.

        Raises:
            NotFoundError: PRODUCT_NOT_FOUND
        """
        product = self.find_by_barcode(barcode)
        if product is None:
            raise exceptions.product_not_found(barcode)
        return product

    def list_products(self) -> List[Product]:
        """Get all products ordered by name."""
        return self._db.query(Product).order_by(Product.name).all()

    def count(self) -> int:
        """Number of products in the catalog."""
        return self._db.query(Product).count()

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create(self, data: ProductCreate) -> Product:
        """
        Create a product.

        Raises:
            ConflictError: PRODUCT_EXISTS if the barcode is taken
        """
        if self.find_by_barcode(data.barcode) is not None:
            raise exceptions.product_exists(data.barcode)

        values = data.model_dump()
        values["image"] = values.get("image") or self._placeholder_image

        product = Product(**values)
        self._db.add(product)
        commit_or_translate(self._db, exceptions.product_exists(data.barcode))
        self._db.refresh(product)

        logger.info(f"✅ Product created: {product.barcode} ({product.name})")
        return product

    def update(self, barcode: str, data: ProductUpdate) -> Product:
        """
        Apply a partial update.

        Existing scanned items keep their own snapshot and are not touched.

        Raises:
            NotFoundError: PRODUCT_NOT_FOUND
        """
        product = self.get(barcode)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(product, field, value)

        commit_or_translate(self._db)
        self._db.refresh(product)

        logger.info(f"✏️ Product updated: {barcode}")
        return product

    def delete(self, barcode: str) -> None:
        """
        Delete a product.

        Raises:
            NotFoundError: PRODUCT_NOT_FOUND
        """
        product = self.get(barcode)
        self._db.delete(product)
        commit_or_translate(self._db)

        logger.info(f"🗑️ Product deleted: {barcode}")

    # =========================================================================
    # BULK LOADING
    # =========================================================================

    def load_file(self, products_file: Path) -> int:
        """
        Insert products from a JSON file, skipping barcodes already present.

        Args:
            products_file: Path to a JSON array of product objects

        Returns:
            Number of products inserted
        """
        with products_file.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {products_file}")

        inserted = 0
        for entry in data:
            if not isinstance(entry, dict) or "barcode" not in entry:
                logger.warning(f"Skipping invalid product entry: {entry!r}")
                continue

            entry = dict(entry, barcode=str(entry["barcode"]))
            if self.find_by_barcode(entry["barcode"]) is not None:
                continue

            product = ProductCreate(**entry)
            values = product.model_dump()
            values["image"] = values.get("image") or self._placeholder_image
            self._db.add(Product(**values))
            inserted += 1

        commit_or_translate(self._db)
        return inserted
