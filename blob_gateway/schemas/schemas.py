"""Pydantic request/response schemas for the upload endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class UploadRequest(BaseModel):
    """JSON body of an upload request."""

    model_config = ConfigDict(populate_by_name=True)

    # null is treated like a missing field
    filename: str | None = None
    base64_document: str | None = Field(default=None, alias="base64Document")


class UploadResult(BaseModel):
    """Envelope returned for every upload outcome."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    file_id: str | None = Field(default=None, alias="fileID")

    def to_payload(self) -> dict[str, str | bool]:
        """Serialize using wire names, dropping fileID when absent."""
        return self.model_dump(by_alias=True, exclude_none=True)
