"""
Global pytest fixtures for the Aerolinks Analytics test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory, backed by a
      JSONL log under tmp_path
    - Provide isolated file and in-memory storage fixtures for direct testing
    - Provide an Analytics fixture wired to the file storage fixture

Why an app factory?
    Using `create_app(storage=...)` ensures each test gets its own log,
    eliminating cross-test flakiness.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from aerolinks_analytics.analytics.analytics import Analytics
from aerolinks_analytics.storage.storage import FileStorage, MemoryStorage


@pytest.fixture
def log_path(tmp_path):
    """Path of a not-yet-created JSONL log inside a not-yet-created directory."""
    return tmp_path / "data" / "events.jsonl"


@pytest.fixture
def storage(log_path) -> FileStorage:
    """Fresh file-backed event log per test."""
    return FileStorage(str(log_path))


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Fresh in-memory event log per test."""
    return MemoryStorage()


@pytest.fixture
def analytics(storage: FileStorage) -> Analytics:
    """Analytics service reading and writing the storage fixture."""
    return Analytics(storage=storage)


@pytest.fixture
def client(storage: FileStorage) -> TestClient:
    """
    Provide a fresh TestClient with a new app instance.

    Notes:
        - The app shares the `storage` fixture, so tests can inspect the log
          directly after going through the HTTP boundary.
    """
    app = create_app(storage=storage)
    return TestClient(app)
