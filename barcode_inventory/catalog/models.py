"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for product catalog requests and responses, plus the
placeholder snapshot used for barcodes missing from the catalog.

==============================================================================
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_PLACEHOLDER_IMAGE = "/api/placeholder/80/80"


def unknown_product_snapshot(image: str = DEFAULT_PLACEHOLDER_IMAGE) -> Dict[str, Any]:
    """
    Snapshot stored for a barcode that is not in the catalog.

    Scanning stays usable for unrecognized barcodes; the item is persisted
    with these values instead of failing.
    """
    return {
        "name": "Unknown Product",
        "brand": "Unknown",
        "calories": 0,
        "protein": "0g",
        "carbs": "0g",
        "fats": "0g",
        "quantity": "Unknown",
        "image": image,
    }


class ProductCreate(BaseModel):
    """
    Product creation payload.

    Attributes:
        barcode: Unique barcode
        name: Product display name
        brand: Brand name
        calories: Energy per serving
        protein, carbs, fats: Free-form magnitudes such as "15g"
        quantity: Free-form package size
        image: Image URI (placeholder when omitted)
    """

    barcode: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    brand: str = Field(..., min_length=1, max_length=255)
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[str] = Field(default=None, max_length=32)
    carbs: Optional[str] = Field(default=None, max_length=32)
    fats: Optional[str] = Field(default=None, max_length=32)
    quantity: Optional[str] = Field(default=None, max_length=64)
    image: Optional[str] = Field(default=None, max_length=512)

    @field_validator("barcode", "name", "brand")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ProductUpdate(BaseModel):
    """Partial product update; only provided fields change."""

    name: Optional[str] = Field(default=None, max_length=255)
    brand: Optional[str] = Field(default=None, max_length=255)
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[str] = Field(default=None, max_length=32)
    carbs: Optional[str] = Field(default=None, max_length=32)
    fats: Optional[str] = Field(default=None, max_length=32)
    quantity: Optional[str] = Field(default=None, max_length=64)
    image: Optional[str] = Field(default=None, max_length=512)

    @field_validator("name", "brand")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class ProductResponse(BaseModel):
    """Product response schema for API endpoints."""

    model_config = ConfigDict(from_attributes=True)

    barcode: str
    name: str
    brand: str
    calories: Optional[int] = None
    protein: Optional[str] = None
    carbs: Optional[str] = None
    fats: Optional[str] = None
    quantity: Optional[str] = None
    image: Optional[str] = None
