"""Upload business logic: request extraction and orchestration against storage."""

import asyncio
import base64
import binascii
from dataclasses import dataclass
from datetime import UTC, datetime
from io import BytesIO

from loguru import logger
from pydantic import ValidationError

from blob_gateway.core.config import Settings
from blob_gateway.core.exceptions import (
    BackendError,
    ConfigurationError,
    InvalidRequestError,
    UploadTimeoutError,
)
from blob_gateway.schemas.schemas import UploadRequest
from blob_gateway.storage.base import StorageBackend, StorageBackendError

GENERATED_FILENAME_PREFIX = "upload_"
GENERATED_FILENAME_EXTENSION = ".bin"


@dataclass(frozen=True)
class DecodedUpload:
    """A filename and the bytes to store under it."""

    filename: str
    payload: bytes


def bound_message(text: str, limit: int) -> str:
    """Truncate backend text so callers never get unbounded diagnostics."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."


def generate_filename(now: datetime | None = None) -> str:
    """Build a sortable filename for raw uploads that did not name themselves."""
    now = now or datetime.now(UTC)
    return f"{GENERATED_FILENAME_PREFIX}{now:%Y%m%dT%H%M%S%f}{GENERATED_FILENAME_EXTENSION}"


def decode_document(encoded: str) -> bytes:
    """Strictly decode standard base64, padding included.

    Line breaks are skipped so wrapped (MIME, `base64` CLI) output decodes;
    any other character outside the alphabet is an error.
    """
    unwrapped = encoded.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(unwrapped, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidRequestError(message=f"Invalid base64 document: {e}") from e


def parse_json_upload(body: bytes) -> DecodedUpload:
    """Extract the upload from a ``{"filename", "base64Document"}`` body."""
    try:
        request = UploadRequest.model_validate_json(body)
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise InvalidRequestError(message=f"Invalid request payload: {errors}") from e

    if not request.filename or not request.base64_document:
        raise InvalidRequestError(message="Filename and base64Document are required")

    return DecodedUpload(
        filename=request.filename,
        payload=decode_document(request.base64_document),
    )


def parse_raw_upload(body: bytes, filename: str | None) -> DecodedUpload:
    """Use the body as-is; name it from the query string or the clock."""
    if filename is not None and not filename.strip():
        raise InvalidRequestError(message="Filename query parameter is empty")
    if not body:
        raise InvalidRequestError(message="Request body is empty")

    resolved = filename or generate_filename()
    if filename is None:
        logger.debug(f"No filename supplied, generated {resolved}")
    return DecodedUpload(filename=resolved, payload=body)


def require_credentials(settings: Settings) -> None:
    """Fail with a configuration error when credentials are not set."""
    missing = settings.missing_credentials()
    if missing:
        raise ConfigurationError(
            message=f"Storage credentials not configured ({', '.join(missing)})"
        )


def upload_document(
    backend: StorageBackend, settings: Settings, upload: DecodedUpload
) -> str:
    """Log in, upload one file, always release the session. Blocking."""
    require_credentials(settings)
    limit = settings.error_message_limit

    try:
        session = backend.login(settings.storage_username, settings.storage_password)
    except StorageBackendError as e:
        raise BackendError(
            message=f"{settings.backend_name} authentication failed: "
            f"{bound_message(str(e), limit)}"
        ) from e

    with session:
        try:
            file_id = session.upload_file_by_reader(
                settings.target_folder_id,
                upload.filename,
                datetime.now(UTC),
                BytesIO(upload.payload),
                len(upload.payload),
            )
        except StorageBackendError as e:
            raise BackendError(
                message=f"{settings.backend_name} upload failed: "
                f"{bound_message(str(e), limit)}"
            ) from e

    logger.success(f"Uploaded {upload.filename} as {file_id}")
    return file_id


async def upload_with_deadline(
    backend: StorageBackend, settings: Settings, upload: DecodedUpload
) -> str:
    """Run the blocking upload in a worker thread under the upload deadline."""
    require_credentials(settings)
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(upload_document, backend, settings, upload),
            timeout=settings.upload_timeout,
        )
    except TimeoutError as e:
        raise UploadTimeoutError(
            message=f"{settings.backend_name} upload timed out after "
            f"{settings.upload_timeout:g} seconds"
        ) from e
