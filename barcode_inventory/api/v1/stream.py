"""
==============================================================================
Scan Stream Endpoint
==============================================================================

GET /scan-stream: Server-Sent Events feed of every announced scan.

Each connection is one registry subscriber. It is removed when the stream
ends, when the client goes away or falls too far behind, and also when
the response finishes without the stream ever being iterated.

==============================================================================
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from barcode_inventory.config import Settings, get_settings
from barcode_inventory.core.dependencies import get_broadcast_registry
from barcode_inventory.realtime import ScanBroadcastRegistry, stream_scan_events


router = APIRouter(tags=["Scan"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.get("/scan-stream")
async def scan_stream(
    request: Request,
    registry: ScanBroadcastRegistry = Depends(get_broadcast_registry),
    settings: Settings = Depends(get_settings)
):
    """
    Open a live scan stream (text/event-stream).

    Returns 503 when the configured subscriber limit is reached.
    """
    subscriber = registry.subscribe()

    return StreamingResponse(
        stream_scan_events(
            registry,
            subscriber,
            keepalive_seconds=settings.stream_keepalive_seconds,
            is_disconnected=request.is_disconnected
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
        background=BackgroundTask(registry.unsubscribe, subscriber)
    )
