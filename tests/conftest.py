"""Shared fixtures for the API tests."""

import pytest
from fastapi.testclient import TestClient

from event_manager_api.app.core.db import init_db
from event_manager_api.app.data.event_store import (
    InMemoryEventStore,
    SQLiteEventStore,
    get_event_store,
)
from event_manager_api.app.main import app


@pytest.fixture
def memory_store():
    return InMemoryEventStore()


@pytest.fixture
def sqlite_store(tmp_path):
    db_path = str(tmp_path / "events.db")
    init_db(db_path)
    return SQLiteEventStore(db_path)


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Each test using this fixture runs once per store implementation."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_event_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_event():
    return {
        "title": "Meetup",
        "description": "Talk",
        "date": "2024-05-01",
        "image": "http://x/y.png",
    }
