"""
Upload API endpoint.

Accepts one file per request and forwards it to the storage backend.
``application/json`` bodies carry ``filename`` and ``base64Document``;
any other body is stored as-is, named by ``?filename=`` or by the clock.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request
from loguru import logger
from starlette.requests import ClientDisconnect

from blob_gateway.api.deps import SettingsDep, StorageBackendDep
from blob_gateway.core.exceptions import InvalidRequestError, MethodNotAllowedError
from blob_gateway.schemas.schemas import UploadResult
from blob_gateway.services.upload_service import (
    parse_json_upload,
    parse_raw_upload,
    upload_with_deadline,
)

router = APIRouter()


def is_json_request(content_type: str | None) -> bool:
    """Return True when the declared media type is JSON."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


@router.post(
    "/upload",
    response_model=UploadResult,
    response_model_exclude_none=True,
)
async def upload_file(
    request: Request,
    settings: SettingsDep,
    backend: StorageBackendDep,
    filename: Annotated[
        str | None, Query(description="Name for a raw-body upload")
    ] = None,
) -> UploadResult:
    """Store one file in the configured storage account."""
    try:
        body = await request.body()
    except ClientDisconnect as e:
        raise InvalidRequestError(
            message=f"Failed to read request body: {str(e) or 'client disconnected'}"
        ) from e

    content_type = request.headers.get("content-type")
    logger.info(f"Received upload request ({len(body)} bytes, {content_type or 'no content type'})")

    if is_json_request(content_type):
        upload = parse_json_upload(body)
    else:
        upload = parse_raw_upload(body, filename)

    file_id = await upload_with_deadline(backend, settings, upload)
    return UploadResult(
        success=True,
        message=f"File uploaded successfully to {settings.backend_name}",
        file_id=file_id,
    )


@router.api_route(
    "/upload",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def reject_upload_method(request: Request) -> None:
    """Answer every method except POST with a 405 envelope."""
    logger.warning(f"Rejected {request.method} on /upload")
    raise MethodNotAllowedError
