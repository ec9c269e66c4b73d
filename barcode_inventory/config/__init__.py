"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from barcode_inventory.config import get_settings

    settings = get_settings()
    print(settings.database_url)
    print(settings.folder_delete_policy)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
