"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

- Common: Health responses
- Folder: Folder CRUD schemas
- Scan: Scan submission and scanned item schemas

Product schemas live with the catalog (barcode_inventory.catalog.models).

==============================================================================
"""

from .common import HealthComponents, HealthResponse
from .folder import FolderCreate, FolderResponse, FolderUpdate
from .scan import (
    LastScanResponse,
    ScanResult,
    ScanSubmit,
    ScannedItemCreate,
    ScannedItemResponse,
)

__all__ = [
    # Common
    "HealthComponents",
    "HealthResponse",
    # Folder
    "FolderCreate",
    "FolderResponse",
    "FolderUpdate",
    # Scan
    "LastScanResponse",
    "ScanResult",
    "ScanSubmit",
    "ScannedItemCreate",
    "ScannedItemResponse",
]
