"""Process configuration loaded from the environment."""

from dataclasses import dataclass
from functools import lru_cache
import os
from typing import TypeVar

from dotenv import load_dotenv
from loguru import logger

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_API_URL = "https://drive-api.proton.me"
DEFAULT_BACKEND_NAME = "Proton Drive"
DEFAULT_UPLOAD_TIMEOUT = 60.0
DEFAULT_ERROR_MESSAGE_LIMIT = 500

T = TypeVar("T", int, float)


@dataclass(frozen=True)
class Settings:
    """Immutable gateway configuration, read once per process."""

    storage_username: str = ""
    storage_password: str = ""
    target_folder_id: str = ""
    api_url: str = DEFAULT_API_URL
    backend_name: str = DEFAULT_BACKEND_NAME
    upload_timeout: float = DEFAULT_UPLOAD_TIMEOUT
    error_message_limit: int = DEFAULT_ERROR_MESSAGE_LIMIT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "DEBUG"
    log_dir: str = "logs"
    log_retention_days: int = 30
    error_log_retention_days: int = 90

    def missing_credentials(self) -> list[str]:
        """Return the names of required credential variables that are unset."""
        missing: list[str] = []
        if not self.storage_username:
            missing.append("STORAGE_USERNAME")
        if not self.storage_password:
            missing.append("STORAGE_PASSWORD")
        return missing


def _env_or_default(key: str, default: str) -> str:
    value = os.getenv(key, "")
    return value or default


def _env_number(key: str, default: T, cast: type[T]) -> T:
    raw = os.getenv(key, "")
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {key}={raw!r}, using {default}")
        return default
    return value


def load_settings() -> Settings:
    """Build settings from environment variables (and a .env file if present)."""
    # Load environment variables from .env file
    load_dotenv()

    return Settings(
        storage_username=os.getenv("STORAGE_USERNAME", ""),
        storage_password=os.getenv("STORAGE_PASSWORD", ""),
        target_folder_id=os.getenv("STORAGE_TARGET_FOLDER_ID", ""),
        api_url=_env_or_default("STORAGE_API_URL", DEFAULT_API_URL).rstrip("/"),
        backend_name=_env_or_default("STORAGE_BACKEND_NAME", DEFAULT_BACKEND_NAME),
        upload_timeout=_env_number(
            "UPLOAD_TIMEOUT_SECONDS", DEFAULT_UPLOAD_TIMEOUT, float
        ),
        error_message_limit=_env_number(
            "ERROR_MESSAGE_LIMIT", DEFAULT_ERROR_MESSAGE_LIMIT, int
        ),
        host=_env_or_default("HOST", DEFAULT_HOST),
        port=_env_number("PORT", DEFAULT_PORT, int),
        log_level=_env_or_default("LOG_LEVEL", "DEBUG").upper(),
        log_dir=_env_or_default("LOG_DIR", "logs"),
        log_retention_days=_env_number("LOG_RETENTION_DAYS", 30, int),
        error_log_retention_days=_env_number("ERROR_LOG_RETENTION_DAYS", 90, int),
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    settings = load_settings()
    logger.info(
        f"Settings loaded (backend={settings.backend_name}, "
        f"api_url={settings.api_url}, port={settings.port})"
    )
    return settings
