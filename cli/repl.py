"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    handle_clear_messages,
    handle_delete,
    handle_download,
    handle_health,
    handle_list,
    handle_messages,
    handle_send,
    handle_sender,
    handle_status,
    handle_upload,
)
from cli.completer import HubCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
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
from cli.parser import ParseError, parse_command


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_logo() -> None:
    """Display Pi Hub logo with ANSI colors."""
    print(LOGO)


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, UploadCommand):
        return handle_upload(cmd_obj)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj)
    elif isinstance(cmd_obj, DownloadCommand):
        return handle_download(cmd_obj)
    elif isinstance(cmd_obj, DeleteCommand):
        return handle_delete(cmd_obj)
    elif isinstance(cmd_obj, SendCommand):
        return handle_send(cmd_obj)
    elif isinstance(cmd_obj, MessagesCommand):
        return handle_messages(cmd_obj)
    elif isinstance(cmd_obj, ClearMessagesCommand):
        return handle_clear_messages(cmd_obj)
    elif isinstance(cmd_obj, SenderCommand):
        return handle_sender(cmd_obj)
    elif isinstance(cmd_obj, StatusCommand):
        return handle_status(cmd_obj)
    elif isinstance(cmd_obj, HealthCommand):
        return handle_health(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def show_welcome() -> None:
    clear_screen()
    show_logo()
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=HubCompleter(), history=history, style=STYLE
    )

    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
