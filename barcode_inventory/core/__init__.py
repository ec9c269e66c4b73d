"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

Modules:
--------
- exceptions: AppException taxonomy, handlers and factory functions
- dependencies: FastAPI dependency functions wiring process-scoped state
- middleware: Request logging

Usage:
------
    from barcode_inventory.core import exceptions
    raise exceptions.folder_not_found(folder_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    StorageError,
    ValidationError,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "ConflictError",
    "NotFoundError",
    "ServiceUnavailableError",
    "StorageError",
    "ValidationError",
    "register_exception_handlers",
]
