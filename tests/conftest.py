from __future__ import annotations

import os

# before anything imports app.db.session
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["WMS_SEED_DEMO_DATA"] = "0"
os.environ.setdefault("WMS_LOG_REQUESTS", "0")

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import SessionLocal, engine, init_db


@pytest.fixture(autouse=True)
def _fresh_schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def sku(db):
    from services.inventory.service import create_sku

    return create_sku(db, code="SKU-100", name="Pallet Wrap", category="Packaging", quantity=10)


@pytest.fixture
def rack(db):
    from services.storage.service import create_rack

    return create_rack(db, name="Rack A", location_code="Zone 1", capacity=100)
