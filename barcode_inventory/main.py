"""
==============================================================================
Barcode Inventory API - Application Entry Point
==============================================================================

FastAPI application with:
- Product catalog and folder CRUD
- Scan ingestion (folder-scoped and free-standing)
- Live scan stream (Server-Sent Events) and read-once last-scan polling

Process-scoped State:
--------------------
The Application factory creates one ScanBroadcastRegistry, one LastScanSlot
and one BackgroundWriter per app and stores them on app.state.

Usage:
------
    # Development
    uvicorn barcode_inventory.main:app --reload --port 3000

    # Production
    uvicorn barcode_inventory.main:app --host 0.0.0.0 --port 3000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from barcode_inventory.config import get_settings
from barcode_inventory.core.exceptions import register_exception_handlers
from barcode_inventory.core.middleware import register_request_logging
from barcode_inventory.db.database import get_database_manager
from barcode_inventory.db.init_db import init_db
from barcode_inventory.api.router import api_router
from barcode_inventory.realtime import LastScanSlot, ScanBroadcastRegistry
from barcode_inventory.services import BackgroundWriter


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Startup and shutdown events
    - Process-scoped scan state
    - Middleware, routers and exception handlers
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Barcode scanning inventory with live scan streaming",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        self._configure_state(app)
        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)
        self._mount_static(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        await self._shutdown(app)

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        init_db()

        logger.info("=" * 60)
        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info(f"🗂️ Folder delete policy: {self._settings.folder_delete_policy}")
        logger.info("=" * 60)

    async def _shutdown(self, app: FastAPI) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")

        writer: BackgroundWriter = app.state.scan_writer
        if writer.pending:
            logger.info(f"⏳ Waiting for {writer.pending} background scan writes")
        await writer.drain()

        get_database_manager().dispose()
        logger.info("✅ Shutdown complete")

    def _configure_state(self, app: FastAPI) -> None:
        """Create the process-scoped scan state."""
        app.state.scan_registry = ScanBroadcastRegistry(
            queue_size=self._settings.stream_queue_size,
            max_subscribers=self._settings.max_stream_subscribers
        )
        app.state.scan_slot = LastScanSlot()
        app.state.scan_writer = BackgroundWriter()

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        register_request_logging(app)

    def _mount_static(self, app: FastAPI) -> None:
        """Serve the front-end when its directory exists."""
        static_path = self._settings.static_path
        if not static_path.is_dir():
            logger.debug(f"Static directory not found, skipping mount: {static_path}")
            return

        app.mount("/static", StaticFiles(directory=str(static_path), html=True), name="static")

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the front-end landing page."""
            return RedirectResponse(url="/static/index.html")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "barcode_inventory.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
