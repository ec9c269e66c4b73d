"""
==============================================================================
Background Write Module
==============================================================================

Tracking for writes that complete after the HTTP response.

The free-standing scan path answers the client (and notifies subscribers)
before its scanned item is stored. Each such write runs as an asyncio task
owned by BackgroundWriter:

- a strong reference is held until the task finishes
- a failure is handed to the injected error sink, never raised to a caller
- drain() waits for everything in flight (used on shutdown and in tests)

==============================================================================
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional, Set


# Module logger
logger = logging.getLogger(__name__)

ErrorSink = Callable[[str, BaseException, Dict[str, Any]], None]


def log_error_sink(message: str, error: BaseException, context: Dict[str, Any]) -> None:
    """Default error sink: log at ERROR level with context and traceback."""
    details = ", ".join(f"{key}={value}" for key, value in context.items())
    logger.error(
        f"❌ {message}: {error} ({details})",
        exc_info=(type(error), error, error.__traceback__)
    )


class BackgroundWriter:
    """
    Owner of detached write tasks.

    Example:
        >>> writer = BackgroundWriter()
        >>> writer.spawn(persist(), barcode="8901234567890")
        >>> await writer.drain()
    """

    def __init__(self, error_sink: Optional[ErrorSink] = None) -> None:
        self._error_sink = error_sink or log_error_sink
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of writes still in flight."""
        return len(self._tasks)

    def spawn(self, write: Awaitable[Any], **context: Any) -> asyncio.Task:
        """
        Schedule a write on the running loop.

        Args:
            write: Coroutine performing the write
            **context: Values reported to the error sink on failure
        """
        task = asyncio.ensure_future(write)
        self._tasks.add(task)
        task.add_done_callback(partial(self._on_done, context))
        return task

    def _on_done(self, context: Dict[str, Any], task: asyncio.Task) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning(f"Background write cancelled ({context})")
            return

        error = task.exception()
        if error is not None:
            self._error_sink("Background scan write failed", error, context)

    async def drain(self) -> None:
        """Wait for all pending writes; failures are already reported."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
