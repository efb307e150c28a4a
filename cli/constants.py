"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "upload", "list", "download", "delete",
    "send", "messages", "clear-messages", "sender",
    "status", "health", "clear", "exit", "help",
]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9E5B bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[38;2;46;158;91m"
RESET = "\033[0m"

LOGO = f"""{GREEN}
 ██████╗ ██╗    ██╗  ██╗██╗   ██╗██████╗
 ██╔══██╗██║    ██║  ██║██║   ██║██╔══██╗
 ██████╔╝██║    ███████║██║   ██║██████╔╝
 ██╔═══╝ ██║    ██╔══██║██║   ██║██╔══██╗
 ██║     ██║    ██║  ██║╚██████╔╝██████╔╝
 ╚═╝     ╚═╝    ╚═╝  ╚═╝ ╚═════╝ ╚═════╝
{RESET}"""

WELCOME_TITLE = "Pi Hub CLI - Local file transfer and chat"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "pihub> "

DEFAULT_MESSAGE_COUNT = 20

CHAT_REPLY_TIMEOUT_SECONDS = 10

HELP_TEXT = """Available commands:
  upload <path>...                    Upload one or more local files
  list                                List files stored on the hub
  download <filename> [output_path]   Download a stored file (defaults to its original name)
  delete <filename>...                Delete stored files by hub filename
  send <text>                         Send a chat message to all connected clients
  messages [n]                        Show the newest n chat messages (default 20)
  clear-messages                      Clear the chat history for everyone
  sender <name>                       Set the sender name used for chat messages
  status                              Show hub host vitals (CPU, memory, disk, temperature)
  health                              Check that the hub is reachable
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Hub filenames carry a timestamp prefix; use 'list' to see them.
Examples:
  upload photos/cat.jpg notes.txt
  list
  download 1714566600123-notes.txt
  download 1714566600123-notes.txt backup/notes.txt
  send "on my way"
  messages 5
  delete 1714566600123-notes.txt"""
