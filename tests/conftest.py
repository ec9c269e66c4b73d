"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, process-scoped scan state and sample
product fixtures.

==============================================================================
"""

import os

# Settings are cached on first import, so the test environment is set first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_SAMPLE_PRODUCTS", "false")
os.environ.setdefault("STATIC_DIRECTORY", "tests/_no_static")

import pytest
from typing import Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from barcode_inventory.main import app
from barcode_inventory.db.database import Base, get_db, get_session_factory
from barcode_inventory.db.models import Product
from barcode_inventory.realtime import LastScanSlot, ScanBroadcastRegistry
from barcode_inventory.services import BackgroundWriter


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    Create test client with database overrides.

    Each test gets its own broadcast registry, handoff slot and background
    writer so scan state never leaks between tests.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal

    app.state.scan_registry = ScanBroadcastRegistry()
    app.state.scan_slot = LastScanSlot()
    app.state.scan_writer = BackgroundWriter()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def products(db: Session) -> List[Product]:
    """Seed the two sample products."""
    items = [
        Product(
            barcode="8901234567890",
            name="Organic Greek Yogurt",
            brand="Nature Valley",
            calories=120,
            protein="15g",
            carbs="9g",
            fats="2g",
            quantity="170g",
            image="/api/placeholder/80/80"
        ),
        Product(
            barcode="7654321098765",
            name="Crunchy Peanut Butter",
            brand="Nutty Delights",
            calories=190,
            protein="7g",
            carbs="6g",
            fats="16g",
            quantity="340g",
            image="/api/placeholder/80/80"
        ),
    ]
    db.add_all(items)
    db.commit()
    return items


@pytest.fixture
def folder_id(client: TestClient) -> str:
    """Create a folder through the API and return its id."""
    response = client.post("/api/folders", json={"name": "Groceries"})
    assert response.status_code == 201
    return response.json()["id"]
