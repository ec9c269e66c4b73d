"""
==============================================================================
Scan Schemas Module
==============================================================================

Request and response schemas for scanning and scanned items.

The barcode is optional at the schema level. Presence and
non-emptiness are checked by the ingestion pipeline so that both entry
points report the same "Barcode is required" error.

==============================================================================
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from barcode_inventory.catalog.models import ProductResponse


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ScannedItemCreate(BaseModel):
    """Add a scanned barcode to a folder."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=255)
    barcode: Optional[str] = Field(default=None, max_length=64)


class ScanSubmit(BaseModel):
    """Free-standing scan submission."""
    barcode: Optional[str] = Field(default=None, max_length=64)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ScannedItemResponse(BaseModel):
    """Persisted scanned item with its product snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    barcode: str
    folder_id: Optional[str] = None
    name: str
    brand: str
    calories: Optional[int] = None
    protein: Optional[str] = None
    carbs: Optional[str] = None
    fats: Optional[str] = None
    quantity: Optional[str] = None
    image: Optional[str] = None
    scanned_at: datetime


class ScanResult(BaseModel):
    """Product resolved for a scanned barcode."""
    message: str
    product: ProductResponse


class LastScanResponse(BaseModel):
    """Pending barcode taken from the handoff slot."""
    barcode: str
