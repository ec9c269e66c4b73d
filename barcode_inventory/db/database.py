"""
==============================================================================
Database Connection Management Module
==============================================================================

Database connection management using SQLAlchemy.

This module implements:
- DatabaseManager: Singleton class owning the engine and session factory
- Session helpers for request handlers and background writes

SQLAlchemy Architecture:
-----------------------
    ┌─────────────────┐
    │ DatabaseManager │ (Singleton)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │     Engine      │ (Connection pool)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  SessionLocal   │ (Session factory)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Session      │ (Request-scoped or per background write)
    └─────────────────┘

Statements are issued sequentially with one commit per write; no
multi-statement transactions are used.

SQLite Note:
-----------
'check_same_thread' is disabled so the FastAPI threadpool and the event
loop can share the engine. The foreign_keys pragma is left at its default
(off) so orphaned scanned items may keep a deleted folder's id.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from barcode_inventory.config import get_settings
from barcode_inventory.core import exceptions


# Module logger
logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for all models
Base = declarative_base()

SessionFactory = Callable[[], Session]


class DatabaseManager:
    """
    Centralized database connection manager.

    The engine is created lazily on first access, so settings can still be
    changed before anything connects.

    Example:
        >>> db_manager = DatabaseManager()
        >>> session = db_manager.get_session()
        >>> folders = session.query(Folder).all()
    """

    _instance: Optional[DatabaseManager] = None

    def __new__(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, '_initialized', False):
            return

        self._settings = get_settings()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._initialized = True

        logger.debug("DatabaseManager initialized")

    # =========================================================================
    # ENGINE MANAGEMENT
    # =========================================================================

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine (lazy initialization)."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """
        Create the SQLAlchemy engine for the configured database URL.

        - SQLite: disables check_same_thread
        - Other backends: pooled connections with pre-ping
        """
        database_url = self._settings.database_url

        if database_url.startswith("sqlite"):
            engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                echo=self._settings.debug,
            )

            logger.info(f"Created SQLite engine: {database_url}")

        else:
            engine = create_engine(
                database_url,
                pool_size=5,
                max_overflow=10,
                pool_timeout=30,
                pool_recycle=1800,
                pool_pre_ping=True,
                echo=self._settings.debug,
            )

            logger.info(f"Created database engine with pooling: {database_url}")

        return engine

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    @property
    def session_factory(self) -> sessionmaker:
        """Get the session factory (lazy initialization)."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    def get_session(self) -> Session:
        """
        Get a new database session.

        The caller is responsible for closing the session.
        """
        return self.session_factory()

    # =========================================================================
    # TABLE MANAGEMENT
    # =========================================================================

    def create_tables(self) -> None:
        """Create all tables that don't already exist."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created/verified")

    # =========================================================================
    # CONNECTION MANAGEMENT
    # =========================================================================

    def dispose(self) -> None:
        """Dispose of the connection pool on shutdown."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connection pool disposed")

    def __repr__(self) -> str:
        return f"DatabaseManager(url={self._settings.database_url!r})"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    """Get the global DatabaseManager instance."""
    return DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a request-scoped database session.

    Usage:
        @router.get("/folders")
        async def list_folders(db: Session = Depends(get_db)):
            ...
    """
    db_manager = get_database_manager()
    session = db_manager.get_session()
    try:
        yield session
    finally:
        session.close()


def get_session_factory() -> SessionFactory:
    """
    FastAPI dependency returning the session factory.

    Used by work that outlives the request, such as detached scan writes,
    which must open their own session.
    """
    return get_database_manager().session_factory


def commit_or_translate(session: Session, conflict=None) -> None:
    """
    Commit the session, translating storage failures.

    Rolls back and raises the given conflict exception on IntegrityError,
    or a StorageError for any other SQLAlchemy failure. Nothing is retried.

    Args:
        session: Session with pending changes
        conflict: AppException raised on a primary key violation
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise (conflict or exceptions.from_storage_error(e)) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Storage failure on commit: {e}")
        raise exceptions.storage_failure() from e
