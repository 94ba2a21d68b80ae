"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
import os
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient
import pytest

from blob_gateway.api.deps import get_storage_backend
from blob_gateway.core.config import Settings, get_settings
from blob_gateway.main import app
from tests.fakes import FakeBackend


@pytest.fixture
def settings() -> Settings:
    """Settings with credentials and a target folder configured."""
    return Settings(
        storage_username="user@example.com",
        storage_password="hunter2",
        target_folder_id="folder-1",
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    """A backend that accepts the login and the upload."""
    return FakeBackend()


@pytest.fixture
def client(
    tmp_path: Path, settings: Settings, fake_backend: FakeBackend
) -> Generator[TestClient, None, None]:
    """Create a test client with settings and storage overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_storage_backend] = lambda: fake_backend

    get_settings.cache_clear()
    with patch.dict(os.environ, {"LOG_DIR": str(tmp_path / "logs")}):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

    get_settings.cache_clear()
    app.dependency_overrides.clear()
