"""Custom completer for the Pi Hub CLI with local file autocompletion."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS


class HubCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local path completion for the 'upload' command
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.

        For the first token, completes command names.
        For 'upload' command arguments, completes local files and directories.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command != "upload":
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        already_typed = set(tokens[1:])
        if not is_typing_new_token:
            already_typed.discard(current_word)

        yield from self._complete_local_paths(current_word, already_typed)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_local_paths(
        self, partial: str, exclude_paths: set
    ) -> Iterable[Completion]:
        """
        Complete paths relative to the current directory.

        Directories are offered with a trailing slash so completion can
        continue into them; hidden entries are only offered once the user
        types a leading dot.
        """
        if "/" in partial:
            directory_part, name_part = partial.rsplit("/", 1)
            directory = Path(directory_part or "/").expanduser()
            prefix = f"{directory_part}/"
        else:
            directory = Path.cwd()
            name_part = partial
            prefix = ""

        if not directory.is_dir():
            return

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError:
            return

        for entry in entries:
            if entry.name.startswith(".") and not name_part.startswith("."):
                continue
            if not entry.name.startswith(name_part):
                continue
            candidate = f"{prefix}{entry.name}"
            if entry.is_dir():
                yield Completion(f"{candidate}/", start_position=-len(partial))
            elif candidate not in exclude_paths:
                yield Completion(candidate, start_position=-len(partial))
