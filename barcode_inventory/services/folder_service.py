"""
==============================================================================
Folder Service Module
==============================================================================

Folder Store: named containers for scanned items.

Deletion Policy:
---------------
- orphan  (default): the folder row is removed, its items keep the old
                     folder_id and stay listable under it
- cascade          : the folder's items are deleted first, then the folder

Deleting a folder that does not exist is a no-op.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from barcode_inventory.core import exceptions
from barcode_inventory.db.database import commit_or_translate
from barcode_inventory.db.models import Folder, ScannedItem, utcnow
from barcode_inventory.schemas.folder import FolderCreate, FolderUpdate


# Module logger
logger = logging.getLogger(__name__)


class FolderService:
    """
    Service for folder CRUD and folder item listing.

    Example:
        >>> service = FolderService(db_session)
        >>> folder = service.create(FolderCreate(name="Groceries"))
        >>> items = service.list_items(folder.id)
    """

    def __init__(self, db: Session, cascade_items: bool = False) -> None:
        """
        Args:
            db: SQLAlchemy database session
            cascade_items: Delete a folder's items together with the folder
        """
        self._db = db
        self._cascade_items = cascade_items

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find(self, folder_id: str) -> Optional[Folder]:
        return self._db.get(Folder, folder_id)

    def get(self, folder_id: str) -> Folder:
        """
        Get folder by id.

        Raises:
            NotFoundError: FOLDER_NOT_FOUND
        """
        folder = self.find(folder_id)
        if folder is None:
            raise exceptions.folder_not_found(folder_id)
        return folder

    def list_folders(self) -> List[Folder]:
        """All folders, newest first."""
        return (
            self._db.query(Folder)
            .order_by(Folder.created_at.desc())
            .all()
        )

    def list_items(self, folder_id: str) -> List[ScannedItem]:
        """
        Items filed under a folder id, newest first.

        Orphaned items of a deleted folder are still returned; an unknown
        id yields an empty list.
        """
        return (
            self._db.query(ScannedItem)
            .filter(ScannedItem.folder_id == folder_id)
            .order_by(ScannedItem.scanned_at.desc())
            .all()
        )

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create(self, data: FolderCreate) -> Folder:
        """Create a folder; created_at and updated_at start out equal."""
        now = utcnow()
        folder = Folder(name=data.name, created_at=now, updated_at=now)
        self._db.add(folder)
        commit_or_translate(self._db)
        self._db.refresh(folder)

        logger.info(f"📁 Folder created: {folder.name} ({folder.id})")
        return folder

    def rename(self, folder_id: str, data: FolderUpdate) -> Folder:
        """
        Rename a folder and bump updated_at.

        Raises:
            NotFoundError: FOLDER_NOT_FOUND
        """
        folder = self.get(folder_id)
        folder.name = data.name
        folder.updated_at = utcnow()

        commit_or_translate(self._db)
        self._db.refresh(folder)

        logger.info(f"✏️ Folder renamed: {folder.id} → {folder.name}")
        return folder

    def delete(self, folder_id: str) -> bool:
        """
        Delete a folder according to the configured policy.

        Returns:
            True if a folder was deleted, False if it did not exist
        """
        folder = self.find(folder_id)
        if folder is None:
            logger.debug(f"Delete of unknown folder ignored: {folder_id}")
            return False

        removed_items = 0
        if self._cascade_items:
            removed_items = (
                self._db.query(ScannedItem)
                .filter(ScannedItem.folder_id == folder_id)
                .delete(synchronize_session=False)
            )

        self._db.delete(folder)
        commit_or_translate(self._db)

        if self._cascade_items:
            logger.info(f"🗑️ Folder deleted: {folder_id} with {removed_items} items")
        else:
            logger.info(f"🗑️ Folder deleted: {folder_id} (items kept)")
        return True
