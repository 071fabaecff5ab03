"""
File domain models and schemas.

Request/response schemas for file operations.

Dependencies: pydantic
System role: File API contracts
"""

from datetime import datetime

from pydantic import Field

from docchat.boundary.db.models.file_model import UploadStatus
from docchat.models.common import RPCModel


class FileResponse(RPCModel):
    """Response schema for a single file."""

    id: str
    name: str
    url: str
    key: str
    upload_status: UploadStatus
    user_id: str
    created_at: datetime
    updated_at: datetime


class FileWithMessageCountResponse(FileResponse):
    """File as listed on the dashboard, with its chat size."""

    message_count: int = Field(ge=0)


class DeleteFileInput(RPCModel):
    """Input for deleteFile."""

    id: str


class GetFileInput(RPCModel):
    """Input for getFile (lookup by storage key)."""

    key: str


class FileUploadStatusInput(RPCModel):
    """Input for getFileUploadStatus."""

    file_id: str


class FileUploadStatusResponse(RPCModel):
    """Processing status of a file."""

    status: UploadStatus
