import os

# Every test application gets its own in-memory database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

import database
from main import app


@pytest.fixture
def client():
    # Entering the TestClient runs the lifespan: a fresh engine and schema per test
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(client):
    resp = client.post("/usuarios", json={"name": "Ana Gerente", "email": "ana@mercado.com.br", "password": "segredo1"})
    assert resp.status_code == 200
    return resp.json()


@pytest.fixture
def make_product(client):
    def _make(name="Feijão", quantity=10, minimum_threshold=5):
        resp = client.post("/produtos", json={"name": name, "quantity": quantity, "minimum_threshold": minimum_threshold})
        assert resp.status_code == 200
        return resp.json()
    return _make
