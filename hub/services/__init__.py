"""Service layer for hub behaviour."""

from hub.services.file_service import FileService
from hub.services.message_service import MessageRelay
from hub.services.system_service import SystemInfoService

__all__ = [
    "FileService",
    "MessageRelay",
    "SystemInfoService",
]
