"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Product Catalog Store keyed by barcode.

Classes:
--------
- ProductCatalog: Lookup and CRUD over the products table
- ProductCreate / ProductUpdate / ProductResponse: Pydantic schemas

==============================================================================
"""

from .models import (
    DEFAULT_PLACEHOLDER_IMAGE,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    unknown_product_snapshot,
)
from .catalog import ProductCatalog

__all__ = [
    "DEFAULT_PLACEHOLDER_IMAGE",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "unknown_product_snapshot",
    "ProductCatalog",
]
