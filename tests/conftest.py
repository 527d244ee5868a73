"""Shared fixtures: every test runs against its own file-backed SQLite database."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.db import dispose_engine, init_db
from app.services.transaction_store import TransactionStore
from main import app


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Point the shared engine at a temporary database for the duration of a test."""
    url = f"sqlite:///{tmp_path / 'finance.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    dispose_engine()
    yield url
    dispose_engine()


@pytest.fixture
def store(database_url: str) -> TransactionStore:
    """Provide a store on a freshly initialized database."""
    _ = database_url
    init_db()
    return TransactionStore()


@pytest.fixture
def client(database_url: str) -> Iterator[TestClient]:
    """Provide a TestClient with the app lifespan running against the temporary database."""
    _ = database_url
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def transaction_payload() -> dict:
    """A valid transaction payload."""
    return {
        "description": "Monthly salary",
        "amount": 1000.0,
        "type": "income",
        "category": "Salary",
        "date": "2024-01-15",
    }
