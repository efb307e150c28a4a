"""Pydantic schemas for API requests, responses and socket frames."""

from hub.schemas.files import (
    StoredFileResponse,
    UploadResponse,
    DeleteFileResponse
)
from hub.schemas.messages import (
    ChatMessage,
    InitFrame,
    MessageFrame,
    ClearFrame,
)
from hub.schemas.system import SystemInfoResponse, HealthResponse
from hub.schemas.common import ErrorResponse

__all__ = [
    "StoredFileResponse",
    "UploadResponse",
    "DeleteFileResponse",
    "ChatMessage",
    "InitFrame",
    "MessageFrame",
    "ClearFrame",
    "SystemInfoResponse",
    "HealthResponse",
    "ErrorResponse"
]
