"""
==============================================================================
Database Initialization Module
==============================================================================

Database initialization and sample data seeding.

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. If the products table is empty, load the sample products file
3. Log initialization status

Usage:
------
    from barcode_inventory.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from barcode_inventory.catalog import ProductCatalog
from barcode_inventory.config import get_settings
from barcode_inventory.db.database import DatabaseManager


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Args:
            db_manager: Optional DatabaseManager instance (creates new if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    def _close_session(self, session: Session) -> None:
        if session is not self._session:
            session.close()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables."""
        self._db_manager.create_tables()

    # =========================================================================
    # SEEDING
    # =========================================================================

    def seed_sample_products(self) -> int:
        """
        Load sample products when the catalog is empty.

        Returns:
            Number of products inserted
        """
        products_path = self._settings.seed_products_path
        if not products_path.exists():
            logger.warning(f"⚠️ Sample products file not found: {products_path}")
            return 0

        session = self._get_session()
        try:
            catalog = ProductCatalog(session, self._settings.placeholder_image)
            if catalog.count() > 0:
                logger.debug("Catalog already populated, skipping sample products")
                return 0

            inserted = catalog.load_file(products_path)
            logger.info(f"✅ Sample products inserted into database: {inserted}")
            return inserted
        finally:
            self._close_session(session)

    # =========================================================================
    # FULL INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """Create tables and seed sample data if enabled."""
        logger.info("🔧 Initializing database...")

        self.create_tables()

        if self._settings.seed_sample_products:
            self.seed_sample_products()

        logger.info("✅ Database initialized successfully")


def init_db() -> None:
    """Initialize the database with tables and sample products."""
    initializer = DatabaseInitializer()
    initializer.initialize()
