"""
Storage capability used by the upload service.

The gateway only needs two things from a remote storage account: open an
authenticated session, and write one file through it. Keeping the surface
this small lets tests supply simple fakes instead of a network client.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from types import TracebackType
from typing import BinaryIO, Protocol, Self

from loguru import logger


class StorageBackendError(Exception):
    """Any failure reported by a storage backend. The message is opaque."""


class StorageSession(ABC):
    """Authenticated handle on a storage account, released by ``close()``."""

    access_token: str = ""
    refresh_token: str = ""

    @abstractmethod
    def upload_file_by_reader(
        self,
        parent_link_id: str,
        filename: str,
        modification_time: datetime,
        reader: BinaryIO,
        size: int,
    ) -> str:
        """Upload ``size`` bytes from ``reader`` and return the new file ID.

        An empty ``parent_link_id`` targets the account's root folder.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the session."""

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.close()
        except StorageBackendError as e:
            logger.warning(f"Failed to close storage session: {e}")


class StorageBackend(Protocol):
    """Factory for authenticated storage sessions."""

    def login(self, username: str, password: str) -> StorageSession: ...


__all__ = ["StorageBackend", "StorageBackendError", "StorageSession"]
