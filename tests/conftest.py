"""Pytest fixtures for backend tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient


def _set_default_env() -> None:
    os.environ.setdefault("ENABLE_SCHEDULER", "false")
    os.environ.setdefault("STORAGE_BACKEND", "memory")
    os.environ.setdefault("AUTH_MODE", "header")


_set_default_env()

from greencredits.services.common import MemoryStore  # noqa: E402


@pytest.fixture
def store() -> MemoryStore:
    """Return an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def client(store: MemoryStore) -> Iterator[TestClient]:
    """Create a FastAPI test client bound to a fresh store."""
    from greencredits.dependencies import get_store
    from greencredits.main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

