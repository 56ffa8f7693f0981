# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from marketplace.config import get_settings
from marketplace.main import app


@pytest.fixture
def client(monkeypatch):
    # every test gets a fresh in-memory store through the app lifespan
    monkeypatch.setenv("STORE_BACKEND", "memory")
    get_settings.cache_clear()
    with TestClient(app) as c:
        yield c
    get_settings.cache_clear()


@pytest.fixture
def widget():
    return {
        "name": "Widget",
        "description": "A widget",
        "price": 9.99,
        "quantity": 10,
        "category": "Tools",
    }
