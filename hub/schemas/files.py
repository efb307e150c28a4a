"""Pydantic schemas for file endpoints."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field


class StoredFileResponse(BaseModel):
    """Descriptor of one stored file."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    size: int
    media_type: str = Field(default="application/octet-stream", alias="type")
    upload_date: str = Field(alias="uploadDate")
    filename: str
    path: str


class UploadResponse(BaseModel):
    """Response model for file upload."""
    success: bool = True
    files: List[StoredFileResponse]


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    success: bool = True
