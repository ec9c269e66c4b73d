"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency functions wiring sessions, services and process-scoped state
into the route handlers.

Process-scoped objects (broadcast registry, handoff slot, background
writer) are created once by the Application factory and stored on
app.state. They are read from the request here, never from module globals,
so each application instance (and each test client) owns its own set.

Dependency Hierarchy:
--------------------
          ┌──────────┐   ┌──────────────────────┐   ┌─────────────────┐
          │ get_db() │   │ get_session_factory()│   │ request.app.state│
          └────┬─────┘   └──────────┬───────────┘   └────────┬────────┘
               │                    │                        │
    ┌──────────┼────────────────────┼────────────────────────┤
    │          │                    │                        │
┌───▼────┐ ┌───▼──────────┐ ┌───────▼────────────────────────▼───┐
│catalog │ │folder_service│ │           scan_pipeline            │
└────────┘ └──────────────┘ └────────────────────────────────────┘

Usage Examples:
--------------
    @router.post("/scan")
    async def submit_scan(
        body: ScanSubmit,
        pipeline: ScanIngestionPipeline = Depends(get_scan_pipeline)
    ):
        ...

==============================================================================
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from barcode_inventory.catalog import ProductCatalog
from barcode_inventory.config import Settings, get_settings
from barcode_inventory.db.database import SessionFactory, get_db, get_session_factory
from barcode_inventory.realtime import LastScanSlot, ScanBroadcastRegistry
from barcode_inventory.services import BackgroundWriter, FolderService, ScanIngestionPipeline


# Module logger
logger = logging.getLogger(__name__)


# =============================================================================
# PROCESS-SCOPED STATE
# =============================================================================

def get_broadcast_registry(request: Request) -> ScanBroadcastRegistry:
    """Scan stream subscriber registry owned by the application."""
    return request.app.state.scan_registry


def get_last_scan_slot(request: Request) -> LastScanSlot:
    """Read-once last-scan slot owned by the application."""
    return request.app.state.scan_slot


def get_background_writer(request: Request) -> BackgroundWriter:
    """Tracker for detached scan writes owned by the application."""
    return request.app.state.scan_writer


# =============================================================================
# SERVICES
# =============================================================================

def get_product_catalog(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> ProductCatalog:
    """Product catalog bound to the request session."""
    return ProductCatalog(db, settings.placeholder_image)


def get_folder_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> FolderService:
    """
    Folder service bound to the request session.

    The configured folder_delete_policy decides whether deleting a folder
    also deletes its scanned items.
    """
    return FolderService(db, cascade_items=settings.cascade_folder_items)


def get_scan_pipeline(
    db: Session = Depends(get_db),
    session_factory: SessionFactory = Depends(get_session_factory),
    registry: ScanBroadcastRegistry = Depends(get_broadcast_registry),
    slot: LastScanSlot = Depends(get_last_scan_slot),
    writer: BackgroundWriter = Depends(get_background_writer),
    settings: Settings = Depends(get_settings)
) -> ScanIngestionPipeline:
    """
    Scan ingestion pipeline for one request.

    Args:
        db: Request-scoped session for lookups and folder-scoped writes
        session_factory: Opens sessions for writes that outlive the request
        registry: Live scan stream subscribers
        slot: Last-scan handoff slot
        writer: Owner of detached writes
        settings: Application settings (placeholder image)
    """
    return ScanIngestionPipeline(
        db,
        registry,
        slot,
        writer,
        session_factory,
        placeholder_image=settings.placeholder_image
    )
