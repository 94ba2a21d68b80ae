from typing import Annotated

from fastapi import Depends
from loguru import logger

from blob_gateway.core.config import Settings, get_settings
from blob_gateway.storage.base import StorageBackend
from blob_gateway.storage.http_client import HttpStorageBackend

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_storage_backend(settings: SettingsDep) -> StorageBackend:
    """Provide the storage backend for dependency injection."""
    logger.debug(f"Using storage backend at {settings.api_url}")
    return HttpStorageBackend(settings.api_url, timeout=settings.upload_timeout)


StorageBackendDep = Annotated[StorageBackend, Depends(get_storage_backend)]
