"""Command parser for CLI input."""

import shlex

from cli.constants import DEFAULT_MESSAGE_COUNT
from cli.models import (
    ClearMessagesCommand,
    CommandRequest,
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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "upload":
        return _parse_upload(args)
    elif command_name == "list":
        return _parse_no_args(args, "list", ListCommand)
    elif command_name == "download":
        return _parse_download(args)
    elif command_name == "delete":
        return _parse_delete(args)
    elif command_name == "send":
        return _parse_send(args)
    elif command_name == "messages":
        return _parse_messages(args)
    elif command_name == "clear-messages":
        return _parse_no_args(args, "clear-messages", ClearMessagesCommand)
    elif command_name == "sender":
        return _parse_sender(args)
    elif command_name == "status":
        return _parse_no_args(args, "status", StatusCommand)
    elif command_name == "health":
        return _parse_no_args(args, "health", HealthCommand)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_no_args(args: list[str], name: str, command_type):
    """Parse a command that takes no arguments."""
    if args:
        raise ParseError(f"{name} takes no arguments")
    return command_type()


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <path>...' command."""
    if not args:
        raise ParseError("upload requires at least one file")

    return UploadCommand(file_list=tuple(args))


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <filename> [output_path]' command."""
    if len(args) < 1:
        raise ParseError("download requires at least 1 argument: <filename> [output_path]")
    if len(args) > 2:
        raise ParseError("download takes at most 2 arguments: <filename> [output_path]")

    filename = args[0]
    output_path = args[1] if len(args) > 1 else None

    return DownloadCommand(filename=filename, output_path=output_path)


def _parse_delete(args: list[str]) -> DeleteCommand:
    """Parse 'delete <filename>...' command."""
    if not args:
        raise ParseError("delete requires at least one filename")

    return DeleteCommand(filenames=tuple(args))


def _parse_send(args: list[str]) -> SendCommand:
    """Parse 'send <text>' command; remaining tokens are joined with spaces."""
    text = " ".join(args).strip()
    if not text:
        raise ParseError("send requires message text")

    return SendCommand(text=text)


def _parse_messages(args: list[str]) -> MessagesCommand:
    """Parse 'messages [n]' command."""
    if not args:
        return MessagesCommand(count=DEFAULT_MESSAGE_COUNT)
    if len(args) > 1:
        raise ParseError("messages takes at most 1 argument: [n]")

    try:
        count = int(args[0])
    except ValueError:
        raise ParseError(f"messages count must be a number, got '{args[0]}'")
    if count < 1:
        raise ParseError("messages count must be at least 1")

    return MessagesCommand(count=count)


def _parse_sender(args: list[str]) -> SenderCommand:
    """Parse 'sender <name>' command."""
    name = " ".join(args).strip()
    if not name:
        raise ParseError("sender requires a name")

    return SenderCommand(name=name)
