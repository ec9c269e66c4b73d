"""
Application Exception Handling

AppException hierarchy for all application errors with FastAPI integration.

Every error response has the same shape:

    {"error": "<human readable message>", ...details}

Taxonomy:
    ValidationError          (400)  missing or malformed required field
    NotFoundError            (404)  unknown barcode / folder / item, empty slot
    ConflictError            (409)  duplicate primary key on insert
    StorageError             (500)  any other persistence failure
    ServiceUnavailableError  (503)  scan stream subscriber limit reached
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base application exception.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404, {"barcode": "123"})
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "FOLDER_NOT_FOUND")
            status_code: HTTP status code (defaults to the class status)
            details: Additional error context merged into the response body
        """
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        body: Dict[str, Any] = {"error": self.message}
        body.update(self.details)
        return body


class ValidationError(AppException):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(AppException):
    """Unknown barcode, folder or item."""

    status_code = 404


class ConflictError(AppException):
    """Duplicate primary key on insert."""

    status_code = 409


class StorageError(AppException):
    """Any other persistence failure."""

    status_code = 500


class ServiceUnavailableError(AppException):
    """A resource limit was reached."""

    status_code = 503


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Converts AppException to a JSON error response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/path validation failures as 400 with a readable message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"

    error = invalid_request(message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Backstop for storage errors that escaped a service boundary."""
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    error = from_storage_error(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_request(message: str) -> ValidationError:
    """Create generic validation exception."""
    return ValidationError(message, "VALIDATION_ERROR")


def barcode_required() -> ValidationError:
    """Create missing barcode exception."""
    return ValidationError("Barcode is required", "BARCODE_REQUIRED")


def product_not_found(barcode: Optional[str] = None) -> NotFoundError:
    """Create product not found exception."""
    details = {"barcode": barcode} if barcode is not None else {}
    return NotFoundError("Product not found", "PRODUCT_NOT_FOUND", details=details)


def folder_not_found(folder_id: Optional[str] = None) -> NotFoundError:
    """Create folder not found exception."""
    details = {"folder_id": folder_id} if folder_id is not None else {}
    return NotFoundError("Folder not found", "FOLDER_NOT_FOUND", details=details)


def no_pending_scan() -> NotFoundError:
    """Create empty handoff slot exception."""
    return NotFoundError("No barcode scanned", "NO_PENDING_SCAN")


def product_exists(barcode: str) -> ConflictError:
    """Create duplicate product exception."""
    return ConflictError(
        f"Product '{barcode}' already exists",
        "PRODUCT_EXISTS",
        details={"barcode": barcode}
    )


def item_exists(item_id: str) -> ConflictError:
    """Create duplicate scanned item exception."""
    return ConflictError(
        f"Scanned item '{item_id}' already exists",
        "ITEM_EXISTS",
        details={"id": item_id}
    )


def storage_failure(message: str = "Storage failure") -> StorageError:
    """Create storage exception."""
    return StorageError(message, "STORAGE_ERROR")


def subscriber_limit(limit: int) -> ServiceUnavailableError:
    """Create scan stream capacity exception."""
    return ServiceUnavailableError(
        "Too many scan stream subscribers",
        "SUBSCRIBER_LIMIT",
        details={"limit": limit}
    )


def from_storage_error(exc: SQLAlchemyError) -> AppException:
    """Translate a SQLAlchemy error into the application taxonomy."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Record already exists", "CONFLICT")
    return storage_failure()
