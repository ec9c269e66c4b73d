"""
==============================================================================
Realtime Package
==============================================================================

Process-scoped state shared by every scan:

- broadcast: ScanBroadcastRegistry pushing scan events to stream subscribers
- stream: Server-Sent Events framing for the live scan stream
- handoff: LastScanSlot, the read-once mailbox for polling clients

==============================================================================
"""

from .broadcast import ScanBroadcastRegistry, ScanEvent, ScanSubscriber, SubscriberClosed
from .handoff import LastScanSlot
from .stream import format_sse, stream_scan_events

__all__ = [
    "ScanBroadcastRegistry",
    "ScanEvent",
    "ScanSubscriber",
    "SubscriberClosed",
    "LastScanSlot",
    "format_sse",
    "stream_scan_events",
]
