"""
==============================================================================
Folder Tests
==============================================================================

Tests for folder endpoints, folder-scoped scans and the deletion policy.

==============================================================================
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from barcode_inventory.db.models import ScannedItem
from barcode_inventory.schemas.folder import FolderCreate
from barcode_inventory.services import FolderService


class TestFolderEndpoints:
    """Tests for folder CRUD."""

    def test_create_folder(self, client: TestClient):
        """Test folder creation trims the name and sets timestamps."""
        response = client.post("/api/folders", json={"name": "  Pantry  "})
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Pantry"
        assert data["id"]
        assert data["created_at"]
        assert data["created_at"] == data["updated_at"]

    def test_create_folder_requires_name(self, client: TestClient):
        """Test missing, empty and blank names are rejected."""
        assert client.post("/api/folders", json={}).status_code == 400
        assert client.post("/api/folders", json={"name": ""}).status_code == 400
        assert client.post("/api/folders", json={"name": "   "}).status_code == 400

    def test_list_folders_newest_first(self, client: TestClient):
        """Test folders are listed newest first."""
        client.post("/api/folders", json={"name": "First"})
        client.post("/api/folders", json={"name": "Second"})

        response = client.get("/api/folders")
        assert response.status_code == 200
        assert [f["name"] for f in response.json()] == ["Second", "First"]

    def test_get_folder(self, client: TestClient, folder_id: str):
        """Test fetching a folder by id."""
        response = client.get(f"/api/folders/{folder_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Groceries"

    def test_get_unknown_folder(self, client: TestClient):
        """Test unknown folder returns 404."""
        response = client.get("/api/folders/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] == "Folder not found"

    def test_rename_folder(self, client: TestClient, folder_id: str):
        """Test rename keeps created_at and moves updated_at forward."""
        before = client.get(f"/api/folders/{folder_id}").json()

        response = client.put(f"/api/folders/{folder_id}", json={"name": "Weekly Shop"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Weekly Shop"
        assert data["created_at"] == before["created_at"]
        assert data["updated_at"] >= before["updated_at"]

    def test_rename_unknown_folder(self, client: TestClient):
        """Test renaming unknown folder returns 404."""
        response = client.put("/api/folders/does-not-exist", json={"name": "X"})
        assert response.status_code == 404

    def test_rename_requires_name(self, client: TestClient, folder_id: str):
        """Test rename rejects an empty name."""
        response = client.put(f"/api/folders/{folder_id}", json={"name": ""})
        assert response.status_code == 400

    def test_delete_folder(self, client: TestClient, folder_id: str):
        """Test deleting a folder."""
        response = client.delete(f"/api/folders/{folder_id}")
        assert response.status_code == 204
        assert client.get(f"/api/folders/{folder_id}").status_code == 404

    def test_delete_unknown_folder_is_noop(self, client: TestClient):
        """Test deleting unknown folder still returns 204."""
        response = client.delete("/api/folders/does-not-exist")
        assert response.status_code == 204


class TestFolderItems:
    """Tests for folder-scoped scanned items."""

    def test_add_known_barcode(self, client: TestClient, products, folder_id: str):
        """Test known barcode is stored with the catalog snapshot."""
        response = client.post(
            f"/api/folders/{folder_id}/items",
            json={"id": "x1", "barcode": "8901234567890"}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "x1"
        assert data["folder_id"] == folder_id
        assert data["name"] == "Organic Greek Yogurt"
        assert data["brand"] == "Nature Valley"
        assert data["calories"] == 120
        assert data["scanned_at"]

        items = client.get(f"/api/folders/{folder_id}/items").json()
        assert [i["id"] for i in items] == ["x1"]

    def test_add_generates_id(self, client: TestClient, products, folder_id: str):
        """Test item id is generated when omitted."""
        response = client.post(f"/api/folders/{folder_id}/items", json={"barcode": "7654321098765"})
        assert response.status_code == 201
        assert response.json()["id"]

    def test_add_unknown_barcode_uses_fallback(self, client: TestClient, folder_id: str):
        """Test unknown barcode is stored as Unknown Product."""
        response = client.post(
            f"/api/folders/{folder_id}/items",
            json={"id": "x2", "barcode": "0000000000000"}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Unknown Product"
        assert data["brand"] == "Unknown"
        assert data["calories"] == 0
        assert data["protein"] == "0g"
        assert data["carbs"] == "0g"
        assert data["fats"] == "0g"
        assert data["quantity"] == "Unknown"
        assert data["image"] == "/api/placeholder/80/80"

    def test_add_to_unknown_folder(self, client: TestClient, products, db: Session):
        """Test scanning into unknown folder returns 404 and stores nothing."""
        response = client.post(
            "/api/folders/does-not-exist/items",
            json={"barcode": "8901234567890"}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Folder not found"
        assert db.query(ScannedItem).count() == 0

    def test_add_requires_barcode(self, client: TestClient, folder_id: str):
        """Test missing or blank barcode returns 400."""
        assert client.post(f"/api/folders/{folder_id}/items", json={}).status_code == 400
        response = client.post(f"/api/folders/{folder_id}/items", json={"barcode": "  "})
        assert response.status_code == 400
        assert response.json()["error"] == "Barcode is required"

    def test_duplicate_item_id_conflicts(self, client: TestClient, products, folder_id: str):
        """Test reused item id returns 409 without a second row."""
        payload = {"id": "dup", "barcode": "8901234567890"}
        assert client.post(f"/api/folders/{folder_id}/items", json=payload).status_code == 201

        response = client.post(f"/api/folders/{folder_id}/items", json=payload)
        assert response.status_code == 409
        assert response.json()["id"] == "dup"

        items = client.get(f"/api/folders/{folder_id}/items").json()
        assert len(items) == 1

    def test_same_barcode_twice_gives_two_items(self, client: TestClient, products, folder_id: str):
        """Test repeated scans are not merged."""
        client.post(f"/api/folders/{folder_id}/items", json={"barcode": "8901234567890"})
        client.post(f"/api/folders/{folder_id}/items", json={"barcode": "8901234567890"})

        items = client.get(f"/api/folders/{folder_id}/items").json()
        assert len(items) == 2

    def test_items_newest_first(self, client: TestClient, products, folder_id: str):
        """Test folder items are listed newest first."""
        client.post(f"/api/folders/{folder_id}/items", json={"id": "a", "barcode": "8901234567890"})
        client.post(f"/api/folders/{folder_id}/items", json={"id": "b", "barcode": "7654321098765"})

        items = client.get(f"/api/folders/{folder_id}/items").json()
        assert [i["id"] for i in items] == ["b", "a"]

    def test_items_of_unknown_folder_is_empty(self, client: TestClient):
        """Test unknown folder id lists no items."""
        response = client.get("/api/folders/does-not-exist/items")
        assert response.status_code == 200
        assert response.json() == []

    def test_delete_keeps_orphaned_items(self, client: TestClient, products, folder_id: str):
        """Test default policy keeps items of a deleted folder."""
        client.post(f"/api/folders/{folder_id}/items", json={"id": "x1", "barcode": "8901234567890"})

        assert client.delete(f"/api/folders/{folder_id}").status_code == 204

        items = client.get(f"/api/folders/{folder_id}/items").json()
        assert [i["id"] for i in items] == ["x1"]
        assert items[0]["folder_id"] == folder_id


class TestFolderService:
    """Tests for FolderService creation and deletion policies."""

    def test_create_sets_equal_timestamps(self, db: Session):
        """Test a new folder has identical created_at and updated_at."""
        folder = FolderService(db).create(FolderCreate(name="Temp"))
        assert folder.created_at == folder.updated_at

    def test_cascade_deletes_items(self, db: Session):
        """Test cascade policy removes only the folder's items."""
        service = FolderService(db, cascade_items=True)
        folder = service.create(FolderCreate(name="Temp"))
        db.add(ScannedItem(id="i1", barcode="1", folder_id=folder.id, name="A", brand="B"))
        db.add(ScannedItem(id="i2", barcode="2", folder_id=None, name="A", brand="B"))
        db.commit()

        assert service.delete(folder.id) is True
        assert service.find(folder.id) is None
        assert service.list_items(folder.id) == []
        assert db.get(ScannedItem, "i2") is not None

    def test_orphan_keeps_items(self, db: Session):
        """Test orphan policy leaves items in place."""
        service = FolderService(db)
        folder = service.create(FolderCreate(name="Temp"))
        db.add(ScannedItem(id="i1", barcode="1", folder_id=folder.id, name="A", brand="B"))
        db.commit()

        assert service.delete(folder.id) is True
        assert [i.id for i in service.list_items(folder.id)] == ["i1"]

    def test_delete_missing_returns_false(self, db: Session):
        """Test deleting a missing folder reports False."""
        assert FolderService(db).delete("missing") is False
