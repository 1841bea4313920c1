"""Pytest configuration and shared fixtures for Translator API tests."""

import pytest
from fastapi.testclient import TestClient

from translator_api.app.core.config import settings
from translator_api.app.core.db import init_db
from translator_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated SQLite file."""
    db_path = tmp_path / "translator_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client(database):
    """Provide a test client; entering it runs the startup hook."""
    with TestClient(create_app()) as test_client:
        yield test_client


# Pytest markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as HTTP-level integration test")
