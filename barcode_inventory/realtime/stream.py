"""
==============================================================================
Scan Stream Module
==============================================================================

Server-Sent Events framing for the live scan stream.

Wire Format:
-----------
    : connected                         (once, flushes headers)

    data: {"barcode":"8901234567890"}   (one per scan event)

    : keep-alive                        (when idle, lets us notice a
                                         silently dropped client)

Events carry no "event:" name so browser EventSource.onmessage receives them.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Awaitable, Callable, Optional

from .broadcast import ScanBroadcastRegistry, ScanEvent, ScanSubscriber


# Module logger
logger = logging.getLogger(__name__)

CONNECTED_COMMENT = ": connected\n\n"
KEEPALIVE_COMMENT = ": keep-alive\n\n"


def format_sse(event: ScanEvent) -> str:
    """Frame one scan event as an SSE message."""
    return f"data: {event.model_dump_json()}\n\n"


async def stream_scan_events(
    registry: ScanBroadcastRegistry,
    subscriber: ScanSubscriber,
    keepalive_seconds: float,
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
) -> AsyncIterator[str]:
    """
    Yield SSE chunks for one subscriber until it disconnects or is dropped.

    The subscriber is always removed from the registry when the generator
    finishes, including when the response is cancelled by the server.

    Args:
        registry: Registry the subscriber belongs to
        subscriber: Handle returned by registry.subscribe()
        keepalive_seconds: Idle interval before a keep-alive comment
        is_disconnected: Coroutine function reporting client disconnect
    """
    try:
        yield CONNECTED_COMMENT

        while not subscriber.closed:
            event = await subscriber.receive(timeout=keepalive_seconds)

            if event is None:
                if is_disconnected is not None and await is_disconnected():
                    break
                yield KEEPALIVE_COMMENT
                continue

            yield format_sse(event)
    finally:
        registry.unsubscribe(subscriber)
