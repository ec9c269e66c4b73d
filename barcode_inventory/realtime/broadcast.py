"""
==============================================================================
Scan Broadcast Registry Module
==============================================================================

In-memory registry of live scan stream subscribers.

Delivery Model:
--------------
    broadcast(event)
          │
          ├──▶ subscriber A queue ──▶ SSE response A
          ├──▶ subscriber B queue ──▶ SSE response B
          └──▶ subscriber C queue (full) ✗ → removed

- One-way, no acknowledgment, no retry
- Events are enqueued in the order broadcast() is called
- Enqueueing never suspends: a subscriber whose bounded queue is full, or
  which is already closed, is treated as a failed send and removed
- A failure for one subscriber never affects delivery to the others

All registry mutations are plain synchronous steps, so interleaved request
handlers on the event loop never observe a half-updated subscriber set.

==============================================================================
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional

from pydantic import BaseModel

from barcode_inventory.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


class ScanEvent(BaseModel):
    """Barcode-scanned notification pushed to stream subscribers."""

    barcode: str


class SubscriberClosed(Exception):
    """Raised when sending to a subscriber that has been closed."""


class ScanSubscriber:
    """
    Handle for one live stream connection.

    Owns a bounded queue filled by the registry and drained by the
    streaming response.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self.id = uuid.uuid4().hex[:8]
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Events waiting to be written to the connection."""
        return self._queue.qsize()

    def send(self, event: ScanEvent) -> None:
        """
        Enqueue an event without waiting.

        Raises:
            SubscriberClosed: if the handle was closed
            asyncio.QueueFull: if the subscriber fell too far behind
        """
        if self._closed:
            raise SubscriberClosed(self.id)
        self._queue.put_nowait(event)

    async def receive(self, timeout: Optional[float] = None) -> Optional[ScanEvent]:
        """Wait for the next event; None when the timeout expires first."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    def close(self) -> None:
        self._closed = True

    def __repr__(self) -> str:
        return f"ScanSubscriber(id={self.id!r}, closed={self._closed})"


class ScanBroadcastRegistry:
    """
    Process-scoped set of live scan stream subscribers.

    Attributes:
        _subscribers: Currently connected handles
        _queue_size: Bound for each subscriber queue
        _max_subscribers: Optional connection cap (None = unbounded)

    Example:
        >>> registry = ScanBroadcastRegistry()
        >>> subscriber = registry.subscribe()
        >>> registry.broadcast(ScanEvent(barcode="8901234567890"))
        1
        >>> registry.unsubscribe(subscriber)
    """

    def __init__(self, queue_size: int = 100, max_subscribers: Optional[int] = None) -> None:
        self._subscribers: List[ScanSubscriber] = []
        self._queue_size = queue_size
        self._max_subscribers = max_subscribers

    # =========================================================================
    # MEMBERSHIP
    # =========================================================================

    def subscribe(self) -> ScanSubscriber:
        """
        Register a new live connection.

        Raises:
            ServiceUnavailableError: SUBSCRIBER_LIMIT when a cap is configured
                and already reached
        """
        if self._max_subscribers is not None and len(self._subscribers) >= self._max_subscribers:
            logger.warning(f"⚠️ Scan stream subscriber limit reached ({self._max_subscribers})")
            raise exceptions.subscriber_limit(self._max_subscribers)

        subscriber = ScanSubscriber(self._queue_size)
        self._subscribers.append(subscriber)

        logger.info(f"📡 Scan stream subscriber connected: {subscriber.id} (total {len(self._subscribers)})")
        return subscriber

    def unsubscribe(self, subscriber: ScanSubscriber) -> None:
        """Remove a connection; unknown handles are ignored."""
        subscriber.close()
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)
            logger.info(f"📴 Scan stream subscriber disconnected: {subscriber.id} (total {len(self._subscribers)})")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: ScanSubscriber) -> bool:
        return subscriber in self._subscribers

    # =========================================================================
    # DELIVERY
    # =========================================================================

    def broadcast(self, event: ScanEvent) -> int:
        """
        Deliver an event to every current subscriber.

        Returns:
            Number of subscribers the event was handed to
        """
        delivered = 0
        failed: List[ScanSubscriber] = []

        for subscriber in list(self._subscribers):
            try:
                subscriber.send(event)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping scan stream subscriber {subscriber.id}: {type(e).__name__} {e}")
                failed.append(subscriber)

        for subscriber in failed:
            self.unsubscribe(subscriber)

        logger.debug(f"Broadcast {event.barcode} to {delivered}/{delivered + len(failed)} subscribers")
        return delivered
