"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

Architecture:
------------
├── database.py   - DatabaseManager class, session helpers
├── models.py     - Product, Folder, ScannedItem
└── init_db.py    - DatabaseInitializer for setup and sample data

==============================================================================
"""

from .database import (
    Base,
    DatabaseManager,
    commit_or_translate,
    get_database_manager,
    get_db,
    get_session_factory,
)
from .models import Folder, Product, ScannedItem

__all__ = [
    "Base",
    "DatabaseManager",
    "commit_or_translate",
    "get_database_manager",
    "get_db",
    "get_session_factory",
    "Folder",
    "Product",
    "ScannedItem",
]
