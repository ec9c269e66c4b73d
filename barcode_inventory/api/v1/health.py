"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from barcode_inventory.core.dependencies import get_broadcast_registry
from barcode_inventory.db.database import get_db
from barcode_inventory.realtime import ScanBroadcastRegistry
from barcode_inventory.schemas.common import HealthComponents, HealthResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session, registry: ScanBroadcastRegistry):
        self._db = db
        self._registry = registry

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError as e:
            logger.error(f"Health check database failure: {e}")
            return "unhealthy"

    def get_health(self) -> HealthResponse:
        """Get full health status."""
        db_status = self.check_database()
        overall = "healthy" if db_status == "healthy" else "degraded"

        return HealthResponse(
            status=overall,
            components=HealthComponents(
                api="healthy",
                database=db_status,
                scan_stream="healthy"
            ),
            subscribers=self._registry.subscriber_count
        )


@router.get("", response_model=HealthResponse)
async def health_check(
    db: Session = Depends(get_db),
    registry: ScanBroadcastRegistry = Depends(get_broadcast_registry)
):
    """
    Health check endpoint.

    Returns API and database status plus the live stream subscriber count.
    """
    controller = HealthController(db, registry)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
