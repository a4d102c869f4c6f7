import itertools
import os
import tempfile

# Settings are read at import time, so point them at throwaway locations first.
_TMP_DIR = tempfile.mkdtemp(prefix="vendor-portal-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.auth import hash_password
from app.database import Base, build_engine, get_db
from app.main import app
from app.vendor.models import Vendor

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def engine():
    """
    Fresh in-memory database per test.
    StaticPool keeps every session on the same connection, so the
    threadpool used by TestClient sees the same data.
    """
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_vendor(db, password_hash):
    """Insert a vendor row directly. Keyword arguments override the defaults."""
    counter = itertools.count(1)

    def _make(**overrides) -> Vendor:
        n = next(counter)
        data = {
            "vendor_name": f"Vendor {n}",
            "owner_name": "Asha Patil",
            "contact_number": "9876543210",
            "email": f"vendor{n}@example.com",
            "business_category": "Catering",
            "city": "Pune",
            "description": "Event catering and office lunches",
            "password": password_hash,
            "average_rating": 0,
            "review_count": 0,
        }
        data.update(overrides)
        vendor = Vendor(**data)
        db.add(vendor)
        db.commit()
        db.refresh(vendor)
        return vendor

    return _make


@pytest.fixture
def registration_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "vendor_name": "Bright Events",
            "owner_name": "Ravi Kumar",
            "contact_number": "9123456780",
            "email": "bright@example.com",
            "business_category": "Events",
            "city": "Mumbai",
            "description": "Full service event planning and decor",
            "password": TEST_PASSWORD,
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def registered_vendor(client, registration_payload):
    """Register through the API. Returns (vendor json, auth headers)."""
    response = client.post("/api/auth/register", json=registration_payload())
    assert response.status_code == 201, response.text
    body = response.json()
    return body["vendor"], {"Authorization": f"Bearer {body['token']}"}
