"""
==============================================================================
Product Catalog Endpoints
==============================================================================

CRUD endpoints for the product catalog, keyed by barcode.

==============================================================================
"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from barcode_inventory.catalog import (
    ProductCatalog,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from barcode_inventory.core.dependencies import get_product_catalog


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, catalog: ProductCatalog):
        self._catalog = catalog

    def list_products(self) -> List[ProductResponse]:
        return [ProductResponse.model_validate(p) for p in self._catalog.list_products()]

    def get_product(self, barcode: str) -> ProductResponse:
        return ProductResponse.model_validate(self._catalog.get(barcode))

    def create_product(self, data: ProductCreate) -> ProductResponse:
        return ProductResponse.model_validate(self._catalog.create(data))

    def update_product(self, barcode: str, data: ProductUpdate) -> ProductResponse:
        return ProductResponse.model_validate(self._catalog.update(barcode, data))

    def delete_product(self, barcode: str) -> None:
        self._catalog.delete(barcode)


@router.get("", response_model=List[ProductResponse])
async def list_products(catalog: ProductCatalog = Depends(get_product_catalog)):
    """List all products ordered by name."""
    controller = ProductController(catalog)
    return controller.list_products()


@router.get("/{barcode}", response_model=ProductResponse)
async def get_product(
    barcode: str,
    catalog: ProductCatalog = Depends(get_product_catalog)
):
    """Get a product by barcode."""
    controller = ProductController(catalog)
    return controller.get_product(barcode)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    catalog: ProductCatalog = Depends(get_product_catalog)
):
    """
    Create a product.

    Barcode, name and brand are required. Returns 409 if the barcode exists.
    """
    controller = ProductController(catalog)
    return controller.create_product(data)


@router.put("/{barcode}", response_model=ProductResponse)
async def update_product(
    barcode: str,
    data: ProductUpdate,
    catalog: ProductCatalog = Depends(get_product_catalog)
):
    """Partially update a product. Existing scanned items are unaffected."""
    controller = ProductController(catalog)
    return controller.update_product(barcode, data)


@router.delete("/{barcode}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    barcode: str,
    catalog: ProductCatalog = Depends(get_product_catalog)
):
    """Delete a product by barcode."""
    controller = ProductController(catalog)
    controller.delete_product(barcode)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
