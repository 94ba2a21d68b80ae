"""Unit tests for settings loading."""

import os
from unittest.mock import patch

from blob_gateway.core.config import (
    DEFAULT_API_URL,
    DEFAULT_PORT,
    Settings,
    get_settings,
    load_settings,
)

_KEYS = (
    "STORAGE_USERNAME",
    "STORAGE_PASSWORD",
    "STORAGE_TARGET_FOLDER_ID",
    "STORAGE_API_URL",
    "STORAGE_BACKEND_NAME",
    "UPLOAD_TIMEOUT_SECONDS",
    "ERROR_MESSAGE_LIMIT",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_RETENTION_DAYS",
    "ERROR_LOG_RETENTION_DAYS",
)


def _clean_env(**values: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _KEYS}
    env.update(values)
    return env


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_when_env_not_set(self):
        """Test that unset variables fall back to defaults."""
        with (
            patch.dict(os.environ, _clean_env(), clear=True),
            patch("blob_gateway.core.config.load_dotenv"),
        ):
            settings = load_settings()

        assert settings.port == DEFAULT_PORT
        assert settings.api_url == DEFAULT_API_URL
        assert settings.backend_name == "Proton Drive"
        assert settings.target_folder_id == ""
        assert settings.missing_credentials() == ["STORAGE_USERNAME", "STORAGE_PASSWORD"]

    def test_reads_environment(self):
        """Test that configured variables are picked up."""
        env = _clean_env(
            STORAGE_USERNAME="alice",
            STORAGE_PASSWORD="secret",
            STORAGE_TARGET_FOLDER_ID="folder-9",
            STORAGE_API_URL="https://storage.example.com/",
            UPLOAD_TIMEOUT_SECONDS="12.5",
            PORT="9090",
            LOG_LEVEL="info",
            LOG_RETENTION_DAYS="14",
            ERROR_LOG_RETENTION_DAYS="365",
        )
        with (
            patch.dict(os.environ, env, clear=True),
            patch("blob_gateway.core.config.load_dotenv"),
        ):
            settings = load_settings()

        assert settings.storage_username == "alice"
        assert settings.storage_password == "secret"
        assert settings.target_folder_id == "folder-9"
        assert settings.api_url == "https://storage.example.com"
        assert settings.upload_timeout == 12.5
        assert settings.port == 9090
        assert settings.log_level == "INFO"
        assert settings.log_retention_days == 14
        assert settings.error_log_retention_days == 365
        assert settings.missing_credentials() == []

    def test_invalid_numbers_fall_back(self):
        """Test that non-numeric or non-positive values are ignored."""
        env = _clean_env(PORT="eighty", UPLOAD_TIMEOUT_SECONDS="-1")
        with (
            patch.dict(os.environ, env, clear=True),
            patch("blob_gateway.core.config.load_dotenv"),
        ):
            settings = load_settings()

        assert settings.port == DEFAULT_PORT
        assert settings.upload_timeout == Settings().upload_timeout

    def test_empty_values_use_defaults(self):
        """Test that empty strings behave like unset variables."""
        env = _clean_env(PORT="", STORAGE_BACKEND_NAME="")
        with (
            patch.dict(os.environ, env, clear=True),
            patch("blob_gateway.core.config.load_dotenv"),
        ):
            settings = load_settings()

        assert settings.port == DEFAULT_PORT
        assert settings.backend_name == "Proton Drive"


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_loaded_once(self):
        """Test that repeated calls return the same instance."""
        get_settings.cache_clear()
        try:
            with patch(
                "blob_gateway.core.config.load_settings", return_value=Settings()
            ) as mock_load:
                first = get_settings()
                second = get_settings()
        finally:
            get_settings.cache_clear()

        assert first is second
        mock_load.assert_called_once()
