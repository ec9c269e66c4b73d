"""
==============================================================================
Scan Ingestion Pipeline Module
==============================================================================

Turns a raw barcode into a product-enriched scanned item and announces it.

Pipeline:
--------
    barcode ──▶ validate ──▶ folder exists? ──▶ catalog lookup ──▶ persist
                                                   │ (miss)
                                                   ▼
                                             fallback snapshot
                                                             │
                              broadcast + handoff slot  ◀────┘

Entry Points:
------------
- add_to_folder(): folder-scoped item creation. Unknown barcodes are stored
  with the "Unknown Product" snapshot and still announced.
- submit_scan(): free-standing scan. Unknown barcodes are rejected with
  nothing announced. Known barcodes are announced immediately and the
  scanned item is written by a tracked background task.
- lookup(): read-only product resolution.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from barcode_inventory.catalog import ProductCatalog, unknown_product_snapshot
from barcode_inventory.catalog.models import DEFAULT_PLACEHOLDER_IMAGE
from barcode_inventory.core import exceptions
from barcode_inventory.db.database import SessionFactory, commit_or_translate
from barcode_inventory.db.models import Product, ScannedItem, new_id
from barcode_inventory.realtime import LastScanSlot, ScanBroadcastRegistry, ScanEvent
from .background import BackgroundWriter
from .folder_service import FolderService


# Module logger
logger = logging.getLogger(__name__)


class ScanIngestionPipeline:
    """
    Scan ingestion for both entry points.

    Attributes:
        _db: Request-scoped session
        _registry: Process-scoped broadcast registry
        _slot: Process-scoped last-scan handoff slot
        _writer: Owner of detached writes
        _session_factory: Opens sessions for detached writes

    Example:
        >>> pipeline = ScanIngestionPipeline(db, registry, slot, writer, session_factory)
        >>> item = await pipeline.add_to_folder(folder_id, "8901234567890")
        >>> product = await pipeline.submit_scan("8901234567890")
    """

    def __init__(
        self,
        db: Session,
        registry: ScanBroadcastRegistry,
        slot: LastScanSlot,
        writer: BackgroundWriter,
        session_factory: SessionFactory,
        placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
    ) -> None:
        self._db = db
        self._registry = registry
        self._slot = slot
        self._writer = writer
        self._session_factory = session_factory
        self._placeholder_image = placeholder_image
        self._catalog = ProductCatalog(db, placeholder_image)

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    async def add_to_folder(
        self,
        folder_id: str,
        barcode: Optional[str],
        item_id: Optional[str] = None,
    ) -> ScannedItem:
        """
        Store a scan under a folder.

        Args:
            folder_id: Target folder
            barcode: Raw barcode from the client
            item_id: Client supplied id, generated when absent

        Returns:
            The persisted scanned item

        Raises:
            ValidationError: BARCODE_REQUIRED
            NotFoundError: FOLDER_NOT_FOUND
            ConflictError: ITEM_EXISTS for a duplicate item id
        """
        barcode = self._validate_barcode(barcode)
        FolderService(self._db).get(folder_id)

        product = self._catalog.find_by_barcode(barcode)
        if product is not None:
            snapshot = product.snapshot()
        else:
            logger.info(f"❓ Barcode {barcode} not in catalog, storing as unknown product")
            snapshot = unknown_product_snapshot(self._placeholder_image)

        if item_id and self._db.get(ScannedItem, item_id) is not None:
            raise exceptions.item_exists(item_id)

        item = ScannedItem(
            id=item_id or new_id(),
            barcode=barcode,
            folder_id=folder_id,
            **snapshot
        )
        self._db.add(item)
        commit_or_translate(self._db, exceptions.item_exists(item.id))
        self._db.refresh(item)

        logger.info(f"📦 Scanned item {item.id} ({barcode}) added to folder {folder_id}")

        self._publish(barcode)
        return item

    async def submit_scan(self, barcode: Optional[str]) -> Product:
        """
        Announce a scan of a known product and store it in the background.

        Raises:
            ValidationError: BARCODE_REQUIRED
            NotFoundError: PRODUCT_NOT_FOUND (nothing is announced)
        """
        barcode = self._validate_barcode(barcode)

        product = self._catalog.find_by_barcode(barcode)
        if product is None:
            logger.info(f"❓ Scan rejected, unknown barcode: {barcode}")
            raise exceptions.product_not_found(barcode)

        self._publish(barcode)

        item_id = new_id()
        self._writer.spawn(
            self._persist_detached(item_id, barcode, product.snapshot()),
            barcode=barcode,
            item_id=item_id
        )
        return product

    def lookup(self, barcode: str) -> Product:
        """Resolve a barcode without storing or announcing anything."""
        return self._catalog.get(self._validate_barcode(barcode))

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @staticmethod
    def _validate_barcode(barcode: Optional[str]) -> str:
        if barcode is None or not barcode.strip():
            raise exceptions.barcode_required()
        return barcode.strip()

    def _publish(self, barcode: str) -> None:
        delivered = self._registry.broadcast(ScanEvent(barcode=barcode))
        self._slot.set(barcode)
        logger.info(f"📢 Scan {barcode} announced to {delivered} subscribers")

    async def _persist_detached(
        self,
        item_id: str,
        barcode: str,
        snapshot: Dict[str, Any],
    ) -> None:
        """Write a free-standing scanned item in its own session."""
        session = self._session_factory()
        try:
            session.add(ScannedItem(id=item_id, barcode=barcode, folder_id=None, **snapshot))
            commit_or_translate(session, exceptions.item_exists(item_id))
            logger.debug(f"Background scan write stored: {item_id} ({barcode})")
        finally:
            session.close()
