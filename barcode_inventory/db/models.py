"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the barcode inventory.

This module defines:
- Product: Catalog entry keyed by barcode
- Folder: Named container for scanned items
- ScannedItem: One persisted scan with a product snapshot

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                           products                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ barcode (VARCHAR, PK)                                           │
    │ name, brand (VARCHAR, NOT NULL)                                 │
    │ calories (INTEGER, NULLABLE)                                    │
    │ protein, carbs, fats, quantity, image (VARCHAR, NULLABLE)       │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │                           folders                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (UUID string, PK)                                            │
    │ name (VARCHAR, NOT NULL)                                        │
    │ created_at, updated_at (DATETIME)                               │
    └─────────────────────────────────────────────────────────────────┘
                                    │
                                    │ 1:N (nullable back-reference,
                                    │      no database cascade)
                                    ▼
    ┌─────────────────────────────────────────────────────────────────┐
    │                        scanned_items                             │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (VARCHAR, PK, client supplied)                               │
    │ barcode (VARCHAR, NOT NULL)                                     │
    │ folder_id (VARCHAR, FK → folders.id, NULLABLE)                  │
    │ name, brand, calories, protein, carbs, fats, quantity, image    │
    │ scanned_at (DATETIME)                                           │
    └─────────────────────────────────────────────────────────────────┘

Scanned items copy the product fields at scan time. Later product edits
never touch existing items.

The folder foreign key is not enforced by SQLite (foreign_keys pragma left off)
so that the "orphan" folder deletion policy can leave items pointing at a
folder that no longer exists.

=============================================================================
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)

from barcode_inventory.db.database import Base


SNAPSHOT_FIELDS = (
    "name",
    "brand",
    "calories",
    "protein",
    "carbs",
    "fats",
    "quantity",
    "image",
)


def utcnow() -> datetime:
    """Naive UTC timestamp with microsecond precision."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return str(uuid.uuid4())


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Product catalog entry.

    Attributes:
        barcode: Unique barcode (primary key)
        name: Product display name
        brand: Brand name
        calories: Energy per serving (nullable)
        protein, carbs, fats: Free-form magnitudes such as "15g"
        quantity: Free-form package size such as "170g"
        image: Image URI
    """

    __tablename__ = "products"

    barcode: str = Column(
        String(64),
        primary_key=True,
        doc="Product barcode"
    )

    name: str = Column(String(255), nullable=False, doc="Product name")
    brand: str = Column(String(255), nullable=False, doc="Brand name")
    calories: Optional[int] = Column(Integer, nullable=True, doc="Calories per serving")
    protein: Optional[str] = Column(String(32), nullable=True, doc="Protein magnitude")
    carbs: Optional[str] = Column(String(32), nullable=True, doc="Carbohydrate magnitude")
    fats: Optional[str] = Column(String(32), nullable=True, doc="Fat magnitude")
    quantity: Optional[str] = Column(String(64), nullable=True, doc="Package quantity")
    image: Optional[str] = Column(String(512), nullable=True, doc="Image URI")

    def snapshot(self) -> Dict[str, Any]:
        """Copy of the fields stored on every scanned item."""
        return {field: getattr(self, field) for field in SNAPSHOT_FIELDS}

    def __repr__(self) -> str:
        return f"Product(barcode={self.barcode!r}, name={self.name!r})"


# =============================================================================
# FOLDER MODEL
# =============================================================================

class Folder(Base):
    """
    Named, user-created grouping of scanned items.

    Attributes:
        id: Unique identifier (UUID string)
        name: Folder display name
        created_at: Creation timestamp
        updated_at: Last rename timestamp
    """

    __tablename__ = "folders"

    id: str = Column(
        String(36),
        primary_key=True,
        default=new_id,
        doc="Unique folder identifier (UUID)"
    )

    name: str = Column(String(255), nullable=False, doc="Folder name")

    created_at: datetime = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        index=True,
        doc="Creation timestamp"
    )

    updated_at: datetime = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc="Last modification timestamp"
    )

    def __repr__(self) -> str:
        return f"Folder(id={self.id!r}, name={self.name!r})"


# =============================================================================
# SCANNED ITEM MODEL
# =============================================================================

class ScannedItem(Base):
    """
    Persisted record of one scan event.

    The product columns are a point-in-time copy taken when the item was
    created. Items are never updated.
    """

    __tablename__ = "scanned_items"

    id: str = Column(
        String(255),
        primary_key=True,
        doc="Client supplied item identifier"
    )

    barcode: str = Column(String(64), nullable=False, index=True, doc="Scanned barcode")

    folder_id: Optional[str] = Column(
        String(36),
        ForeignKey("folders.id"),
        nullable=True,
        index=True,
        doc="Owning folder (nullable)"
    )

    name: str = Column(String(255), nullable=False)
    brand: str = Column(String(255), nullable=False)
    calories: Optional[int] = Column(Integer, nullable=True)
    protein: Optional[str] = Column(String(32), nullable=True)
    carbs: Optional[str] = Column(String(32), nullable=True)
    fats: Optional[str] = Column(String(32), nullable=True)
    quantity: Optional[str] = Column(String(64), nullable=True)
    image: Optional[str] = Column(String(512), nullable=True)

    scanned_at: datetime = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        index=True,
        doc="Server assigned scan timestamp"
    )

    def __repr__(self) -> str:
        return (
            f"ScannedItem(id={self.id!r}, "
            f"barcode={self.barcode!r}, "
            f"folder_id={self.folder_id!r})"
        )
