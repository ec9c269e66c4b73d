"""
==============================================================================
Last-Scan Handoff Slot Module
==============================================================================

Single-value, read-once mailbox for clients that poll instead of holding a
stream open.

- set() overwrites any pending barcode (last write wins, no queue)
- take_and_clear() returns the pending barcode and empties the slot

A second scan before the first is read replaces it for polling clients;
the broadcast registry still delivers both. One active scanning client is
assumed.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional


# Module logger
logger = logging.getLogger(__name__)


class LastScanSlot:
    """
    Process-scoped handoff slot.

    Example:
        >>> slot = LastScanSlot()
        >>> slot.set("8901234567890")
        >>> slot.take_and_clear()
        '8901234567890'
        >>> slot.take_and_clear() is None
        True
    """

    def __init__(self) -> None:
        self._barcode: Optional[str] = None

    def set(self, barcode: str) -> None:
        if self._barcode is not None:
            logger.debug(f"Handoff slot overwrite: {self._barcode} → {barcode}")
        self._barcode = barcode

    def take_and_clear(self) -> Optional[str]:
        barcode, self._barcode = self._barcode, None
        return barcode

    @property
    def is_empty(self) -> bool:
        return self._barcode is None
