"""
pytest configuration and fixtures for the key-value testing suite
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from database.connection import get_db_pool
from .infrastructure import FakePool


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def app(fake_pool):
    """Application wired to the in-memory pool; the lifespan bootstrap is not run"""
    application = create_app()
    application.dependency_overrides[get_db_pool] = lambda: fake_pool
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def insert(client):
    """Insert helper returning the response"""
    def _insert(key: str, value: str):
        return client.post("/insert", data={"key": key, "value": value})
    return _insert
