import itertools
import os

# Point the app at an in-memory database before anything imports settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import Base, build_engine, get_db, init_db
from main import app

API = "/api/v1"


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    init_db(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_warehouse(client):
    counter = itertools.count(1)

    def _make(name=None, capacity=1000, location="Test Location"):
        r = client.post(f"{API}/warehouses", json={
            "name": name or f"Warehouse {next(counter)}",
            "location": location,
            "max_capacity": capacity,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def add_stock(client):
    def _add(warehouse_id, sku, quantity, name=None, **extra):
        payload = {
            "warehouse_id": warehouse_id,
            "product_sku": sku,
            "product_name": name or f"Product {sku}",
            "quantity": quantity,
        }
        payload.update(extra)
        r = client.post(f"{API}/inventories", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _add


@pytest.fixture
def make_shelf(client):
    def _make(warehouse_id, code, description=None):
        r = client.post(f"{API}/warehouses/id/{warehouse_id}/shelves", json={
            "code": code, "description": description,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make
