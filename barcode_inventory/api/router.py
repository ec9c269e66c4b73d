"""
==============================================================================
Main API Router
==============================================================================

Combines all v1 routes under the /api prefix.

==============================================================================
"""

from fastapi import APIRouter

from barcode_inventory.api.v1 import health, products, folders, scan, stream


class MainAPIRouter:
    """
    Main API router combining all route modules.

    Provides a single entry point for all API endpoints.
    """

    def __init__(self, prefix: str = "/api"):
        self._router = APIRouter(prefix=prefix)
        self._include_routers()

    def _include_routers(self) -> None:
        """Include all v1 routers."""
        self._router.include_router(health.router)
        self._router.include_router(products.router)
        self._router.include_router(folders.router)
        self._router.include_router(scan.router)
        self._router.include_router(stream.router)

    @property
    def router(self):
        """Get the FastAPI router instance."""
        return self._router


# Create main API router instance
api_router = MainAPIRouter().router
