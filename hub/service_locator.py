"""Service locator for the hub's long-lived service instances."""

from typing import Optional

from hub.services.file_service import FileService
from hub.services.message_service import MessageRelay
from hub.services.system_service import SystemInfoService

_file_service: Optional[FileService] = None
_message_relay: Optional[MessageRelay] = None
_system_info_service: Optional[SystemInfoService] = None


def set_file_service(service: Optional[FileService]):
    """Set global file service instance"""
    global _file_service
    _file_service = service


def get_file_service() -> FileService:
    """Get global file service instance, creating it from config on first use"""
    global _file_service
    if _file_service is None:
        _file_service = FileService()
    return _file_service


def set_message_relay(relay: Optional[MessageRelay]):
    """Set global message relay instance"""
    global _message_relay
    _message_relay = relay


def get_message_relay() -> MessageRelay:
    """Get global message relay instance, loading history on first use"""
    global _message_relay
    if _message_relay is None:
        _message_relay = MessageRelay()
    return _message_relay


def set_system_info_service(service: Optional[SystemInfoService]):
    """Set global system info service instance"""
    global _system_info_service
    _system_info_service = service


def get_system_info_service() -> SystemInfoService:
    """Get global system info service instance"""
    global _system_info_service
    if _system_info_service is None:
        _system_info_service = SystemInfoService()
    return _system_info_service
