"""
==============================================================================
Scan Endpoint Tests
==============================================================================

Tests for free-standing scans, last-scan polling, lookup and the
announcements made by both scan entry points, and the live scan stream
endpoint.

==============================================================================
"""

import asyncio

from fastapi.testclient import TestClient
from starlette.requests import Request
from sqlalchemy.orm import Session

from barcode_inventory.api.v1.stream import scan_stream
from barcode_inventory.config import Settings
from barcode_inventory.db.models import ScannedItem
from barcode_inventory.realtime import ScanBroadcastRegistry


def drain_writes(client: TestClient) -> None:
    """Wait for detached scan writes on the app's event loop."""
    client.portal.call(client.app.state.scan_writer.drain)


class TestSubmitScan:
    """Tests for POST /api/scan."""

    def test_known_barcode(self, client: TestClient, products, db: Session):
        """Test known barcode returns the product and is stored unfiled."""
        response = client.post("/api/scan", json={"barcode": "8901234567890"})
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Barcode received"
        assert data["product"]["name"] == "Organic Greek Yogurt"

        drain_writes(client)
        items = db.query(ScannedItem).filter(ScannedItem.barcode == "8901234567890").all()
        assert len(items) == 1
        assert items[0].folder_id is None
        assert items[0].brand == "Nature Valley"

    def test_known_barcode_fills_slot(self, client: TestClient, products):
        """Test known barcode lands in the last-scan slot."""
        client.post("/api/scan", json={"barcode": "8901234567890"})

        response = client.get("/api/scan/last")
        assert response.status_code == 200
        assert response.json() == {"barcode": "8901234567890"}

    def test_unknown_barcode_has_no_effects(self, client: TestClient, products, db: Session):
        """Test unknown barcode returns 404 without slot, broadcast or row."""
        subscriber = client.app.state.scan_registry.subscribe()

        response = client.post("/api/scan", json={"barcode": "0000000000000"})
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found", "barcode": "0000000000000"}

        drain_writes(client)
        assert client.get("/api/scan/last").status_code == 404
        assert subscriber.pending == 0
        assert db.query(ScannedItem).count() == 0

    def test_requires_barcode(self, client: TestClient):
        """Test missing or empty barcode returns 400."""
        assert client.post("/api/scan", json={}).status_code == 400
        response = client.post("/api/scan", json={"barcode": ""})
        assert response.status_code == 400
        assert response.json()["error"] == "Barcode is required"

    def test_barcode_is_trimmed(self, client: TestClient, products):
        """Test surrounding whitespace is stripped."""
        response = client.post("/api/scan", json={"barcode": " 7654321098765 "})
        assert response.status_code == 200
        assert client.get("/api/scan/last").json()["barcode"] == "7654321098765"

    def test_known_barcode_reaches_subscriber(self, client: TestClient, products):
        """Test known barcode is broadcast to subscribers."""
        subscriber = client.app.state.scan_registry.subscribe()

        client.post("/api/scan", json={"barcode": "7654321098765"})

        assert subscriber.pending == 1
        event = asyncio.run(subscriber.receive(timeout=1))
        assert event.barcode == "7654321098765"


class TestLastScan:
    """Tests for GET /api/scan/last."""

    def test_empty_slot(self, client: TestClient):
        """Test empty slot returns 404."""
        response = client.get("/api/scan/last")
        assert response.status_code == 404
        assert response.json()["error"] == "No barcode scanned"

    def test_read_once(self, client: TestClient, products, folder_id: str):
        """Test pending barcode is cleared once read."""
        client.post(f"/api/folders/{folder_id}/items", json={"barcode": "8901234567890"})

        first = client.get("/api/scan/last")
        assert first.status_code == 200
        assert first.json()["barcode"] == "8901234567890"

        assert client.get("/api/scan/last").status_code == 404

    def test_last_write_wins(self, client: TestClient, products):
        """Test only the latest barcode is kept."""
        client.post("/api/scan", json={"barcode": "8901234567890"})
        client.post("/api/scan", json={"barcode": "7654321098765"})

        assert client.get("/api/scan/last").json()["barcode"] == "7654321098765"
        assert client.get("/api/scan/last").status_code == 404


class TestLookup:
    """Tests for GET /api/scan/{barcode}."""

    def test_lookup_known(self, client: TestClient, products):
        """Test lookup of a known barcode."""
        response = client.get("/api/scan/8901234567890")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Product found"
        assert data["product"]["barcode"] == "8901234567890"

    def test_lookup_has_no_side_effects(self, client: TestClient, products, db: Session):
        """Test lookup neither fills the slot nor stores an item."""
        client.get("/api/scan/8901234567890")

        assert client.get("/api/scan/last").status_code == 404
        assert db.query(ScannedItem).count() == 0

    def test_lookup_unknown(self, client: TestClient):
        """Test lookup of unknown barcode returns 404."""
        response = client.get("/api/scan/0000000000000")
        assert response.status_code == 404
        assert response.json()["barcode"] == "0000000000000"


class TestFolderScanAnnouncements:
    """Folder-scoped scans are announced like free-standing ones."""

    def test_known_and_unknown_are_broadcast(self, client: TestClient, products, folder_id: str):
        """Test folder scans reach every subscriber in order."""
        registry = client.app.state.scan_registry
        first = registry.subscribe()
        second = registry.subscribe()

        client.post(f"/api/folders/{folder_id}/items", json={"barcode": "8901234567890"})
        client.post(f"/api/folders/{folder_id}/items", json={"barcode": "0000000000000"})

        for subscriber in (first, second):
            assert subscriber.pending == 2

        async def collect():
            return [(await first.receive(timeout=1)).barcode for _ in range(2)]

        assert asyncio.run(collect()) == ["8901234567890", "0000000000000"]
        assert client.get("/api/scan/last").json()["barcode"] == "0000000000000"

    def test_failed_insert_is_not_announced(self, client: TestClient, products, folder_id: str):
        """Test a rejected insert is not broadcast."""
        payload = {"id": "dup", "barcode": "8901234567890"}
        client.post(f"/api/folders/{folder_id}/items", json=payload)
        client.get("/api/scan/last")

        subscriber = client.app.state.scan_registry.subscribe()
        assert client.post(f"/api/folders/{folder_id}/items", json=payload).status_code == 409

        assert subscriber.pending == 0
        assert client.get("/api/scan/last").status_code == 404

    def test_stale_subscriber_is_dropped(self, client: TestClient, products, folder_id: str):
        """Test closed subscribers are pruned on broadcast."""
        registry = client.app.state.scan_registry
        stale = registry.subscribe()
        live = registry.subscribe()
        stale.close()

        response = client.post(f"/api/folders/{folder_id}/items", json={"barcode": "8901234567890"})
        assert response.status_code == 201

        assert stale not in registry
        assert live in registry
        assert live.pending == 1


class ShortLivedRegistry(ScanBroadcastRegistry):
    """Registry whose subscribers are closed as soon as they connect."""

    def subscribe(self):
        subscriber = super().subscribe()
        subscriber.close()
        return subscriber


class TestScanStreamEndpoint:
    """Tests for GET /api/scan-stream."""

    def test_subscriber_limit_returns_503(self, client: TestClient):
        """Test a full registry rejects new stream connections."""
        registry = ScanBroadcastRegistry(max_subscribers=1)
        registry.subscribe()
        client.app.state.scan_registry = registry

        response = client.get("/api/scan-stream")
        assert response.status_code == 503
        assert response.json() == {"error": "Too many scan stream subscribers", "limit": 1}
        assert registry.subscriber_count == 1

    def test_stream_opens_with_connected_comment(self, client: TestClient):
        """Test stream starts with the connected comment and SSE headers."""
        registry = ShortLivedRegistry()
        client.app.state.scan_registry = registry

        response = client.get("/api/scan-stream")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["x-accel-buffering"] == "no"
        assert response.text == ": connected\n\n"
        assert registry.subscriber_count == 0

    def test_unstarted_stream_releases_subscriber(self):
        """Test the response releases its subscriber even if never iterated."""
        registry = ScanBroadcastRegistry()

        async def scenario():
            response = await scan_stream(Request({"type": "http"}), registry, Settings())
            assert registry.subscriber_count == 1
            await response.background()
            return registry.subscriber_count

        assert asyncio.run(scenario()) == 0
