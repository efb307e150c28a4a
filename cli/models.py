"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadCommand:
    """Upload local files."""

    file_list: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ListCommand:
    """List stored files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class DownloadCommand:
    """Download file by hub filename."""

    filename: str
    output_path: str | None = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete stored files by hub filename."""

    filenames: tuple[str, ...]
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class SendCommand:
    """Send one chat message."""

    text: str
    command: Literal["send"] = "send"


@dataclass(frozen=True)
class MessagesCommand:
    """Show the newest chat messages."""

    count: int
    command: Literal["messages"] = "messages"


@dataclass(frozen=True)
class ClearMessagesCommand:
    """Clear the chat history."""

    command: Literal["clear-messages"] = "clear-messages"


@dataclass(frozen=True)
class SenderCommand:
    """Set the chat sender name."""

    name: str
    command: Literal["sender"] = "sender"


@dataclass(frozen=True)
class StatusCommand:
    """Show host vitals."""

    command: Literal["status"] = "status"


@dataclass(frozen=True)
class HealthCommand:
    """Check hub health."""

    command: Literal["health"] = "health"


CommandRequest = (
    UploadCommand
    | ListCommand
    | DownloadCommand
    | DeleteCommand
    | SendCommand
    | MessagesCommand
    | ClearMessagesCommand
    | SenderCommand
    | StatusCommand
    | HealthCommand
)
