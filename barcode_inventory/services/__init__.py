"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes sitting between the API routers and the ORM.

This package provides:
- FolderService: Folder CRUD and folder item listing
- ScanIngestionPipeline: Barcode validation, enrichment, storage and
  announcement for both scan entry points
- BackgroundWriter: Tracking for writes that finish after the response

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   ORM Session   │  ← Data Access
    └─────────────────┘

Services receive their session and process-scoped collaborators through
the constructor; the routers build them from FastAPI dependencies.

==============================================================================
"""

from .background import BackgroundWriter, log_error_sink
from .folder_service import FolderService
from .scan_service import ScanIngestionPipeline

__all__ = [
    "BackgroundWriter",
    "log_error_sink",
    "FolderService",
    "ScanIngestionPipeline",
]
