"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.chat_client import ChatClient
from cli.config import Config
from cli.hub_client import HubClient
from cli.models import (
    ClearMessagesCommand,
    DeleteCommand,
    DownloadCommand,
    HealthCommand,
    ListCommand,
    MessagesCommand,
    SendCommand,
    SenderCommand,
    StatusCommand,
    UploadCommand,
)

logger = get_logger(__name__)

CONFIG_PATH = Path.home() / '.pihub' / 'config.json'

_config: Optional[Config] = None
_client: Optional[HubClient] = None
_chat_client: Optional[ChatClient] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config(CONFIG_PATH)
    return _config


def get_client() -> HubClient:
    """
    Get or create global HubClient instance.

    Returns:
        HubClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new HubClient instance")
        _client = HubClient(get_config())
    return _client


def get_chat_client() -> ChatClient:
    """
    Get or create global ChatClient instance.

    Returns:
        ChatClient instance
    """
    global _chat_client
    if _chat_client is None:
        logger.debug("Creating new ChatClient instance")
        _chat_client = ChatClient(get_config())
    return _chat_client


def handle_upload(cmd: UploadCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with file_list
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Success or error message with upload results
    """
    logger.info(f"Executing upload command: {len(cmd.file_list)} files")
    if client is None:
        client = get_client()
    result = client.upload_files(list(cmd.file_list))
    logger.debug("Upload command completed")
    return result


def handle_list(cmd: ListCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Formatted list of files
    """
    if client is None:
        client = get_client()
    return client.list_files()


def handle_download(cmd: DownloadCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with filename and optional output_path
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Success or error message with download results
    """
    logger.info(f"Executing download command: filename={cmd.filename} output_path={cmd.output_path}")
    if client is None:
        client = get_client()
    result = client.download(cmd.filename, cmd.output_path)
    logger.debug("Download command completed")
    return result


def handle_delete(cmd: DeleteCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with filenames
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Result line per file
    """
    if client is None:
        client = get_client()
    return client.delete_files(list(cmd.filenames))


def handle_status(cmd: StatusCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'status' command.

    Args:
        cmd: StatusCommand
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Formatted host vitals
    """
    if client is None:
        client = get_client()
    return client.system_status()


def handle_health(cmd: HealthCommand, client: Optional[HubClient] = None) -> str:
    """
    Handle 'health' command.

    Args:
        cmd: HealthCommand
        client: Optional HubClient for dependency injection (testing)

    Returns:
        Health summary
    """
    if client is None:
        client = get_client()
    return client.health()


def handle_send(cmd: SendCommand, chat_client: Optional[ChatClient] = None) -> str:
    """
    Handle 'send' command.

    Args:
        cmd: SendCommand with text
        chat_client: Optional ChatClient for dependency injection (testing)

    Returns:
        Confirmation or error message
    """
    if chat_client is None:
        chat_client = get_chat_client()
    return chat_client.send_message(cmd.text)


def handle_messages(cmd: MessagesCommand, chat_client: Optional[ChatClient] = None) -> str:
    """
    Handle 'messages' command.

    Args:
        cmd: MessagesCommand with count
        chat_client: Optional ChatClient for dependency injection (testing)

    Returns:
        Formatted messages
    """
    if chat_client is None:
        chat_client = get_chat_client()
    return chat_client.fetch_messages(cmd.count)


def handle_clear_messages(cmd: ClearMessagesCommand, chat_client: Optional[ChatClient] = None) -> str:
    """
    Handle 'clear-messages' command.

    Args:
        cmd: ClearMessagesCommand
        chat_client: Optional ChatClient for dependency injection (testing)

    Returns:
        Confirmation or error message
    """
    if chat_client is None:
        chat_client = get_chat_client()
    return chat_client.clear_messages()


def handle_sender(cmd: SenderCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'sender' command.

    Args:
        cmd: SenderCommand with name
        config: Optional Config for dependency injection (testing)

    Returns:
        Confirmation message
    """
    if config is None:
        config = get_config()
    config.set_sender(cmd.name)
    return f"Chat messages will be sent as: {cmd.name}"
