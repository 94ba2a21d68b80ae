"""Storage backend speaking the drive HTTP API through httpx."""

from datetime import datetime
from typing import Any, BinaryIO

import httpx
from loguru import logger

from blob_gateway.storage.base import StorageBackendError, StorageSession


def _error_text(response: httpx.Response) -> str:
    """Pull the backend's own error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("Error"):
        return f"{body['Error']} (HTTP {response.status_code})"
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _json_field(response: httpx.Response, field: str) -> str:
    if response.is_error:
        raise StorageBackendError(_error_text(response))
    try:
        body: Any = response.json()
    except ValueError as e:
        raise StorageBackendError(f"malformed response body: {e}") from e
    value = body.get(field) if isinstance(body, dict) else None
    if not isinstance(value, str) or not value:
        raise StorageBackendError(f"response is missing {field}")
    return value


class HttpStorageSession(StorageSession):
    """Bearer-authenticated session; owns its httpx client."""

    def __init__(
        self, client: httpx.Client, access_token: str, refresh_token: str
    ) -> None:
        self._client = client
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._closed = False

    def upload_file_by_reader(
        self,
        parent_link_id: str,
        filename: str,
        modification_time: datetime,
        reader: BinaryIO,
        size: int,
    ) -> str:
        logger.debug(f"Uploading {filename} ({size} bytes) to folder {parent_link_id or 'root'}")
        try:
            response = self._client.post(
                "/drive/files",
                headers={"Authorization": f"Bearer {self.access_token}"},
                data={
                    "ParentLinkID": parent_link_id,
                    "Name": filename,
                    "ModificationTime": str(int(modification_time.timestamp())),
                    "Size": str(size),
                },
                files={"File": (filename, reader, "application/octet-stream")},
            )
        except httpx.HTTPError as e:
            raise StorageBackendError(str(e) or type(e).__name__) from e
        return _json_field(response, "FileID")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            response = self._client.post(
                "/auth/logout",
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
            if response.is_error:
                raise StorageBackendError(_error_text(response))
        except httpx.HTTPError as e:
            raise StorageBackendError(str(e) or type(e).__name__) from e
        finally:
            self._client.close()
        logger.debug("Storage session closed")


class HttpStorageBackend:
    """Opens sessions against ``api_url``; each login gets its own client."""

    def __init__(
        self,
        api_url: str,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    def login(self, username: str, password: str) -> HttpStorageSession:
        client = httpx.Client(
            base_url=self.api_url,
            timeout=self.timeout,
            transport=self._transport,
        )
        logger.debug(f"Logging in to {self.api_url} as {username}")
        try:
            response = client.post(
                "/auth/login", json={"Username": username, "Password": password}
            )
            access_token = _json_field(response, "AccessToken")
            refresh_token = _json_field(response, "RefreshToken")
        except httpx.HTTPError as e:
            client.close()
            raise StorageBackendError(str(e) or type(e).__name__) from e
        except StorageBackendError:
            client.close()
            raise
        return HttpStorageSession(client, access_token, refresh_token)
