"""Persists the chat history as one flat JSON array file."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from hub import config

logger = logging.getLogger(__name__)


class MessageRepository:
    """
    Whole-file JSON store for chat messages.

    Every save rewrites the full array; the last write wins. There is no
    indexing and no per-message durability.
    """

    def __init__(self, messages_path: Optional[Path] = None):
        """
        Initialize message repository.

        Args:
            messages_path: Path to the JSON file (default: PIHUB_MESSAGES_FILE)
        """
        self._messages_path = Path(messages_path) if messages_path is not None else config.MESSAGES_FILE

    @property
    def path(self) -> Path:
        return self._messages_path

    def load(self) -> List[Dict[str, Any]]:
        """
        Load message history from disk.

        Returns:
            Stored messages newest first, or an empty list if the file is
            missing, unreadable or not a JSON array
        """
        if not self._messages_path.exists():
            logger.debug(f"Messages file not found at {self._messages_path}, starting with empty history")
            return []

        try:
            with open(self._messages_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(
                f"Failed to load messages from {self._messages_path}: {e}, "
                "starting with empty history"
            )
            return []

        if not isinstance(data, list):
            logger.warning(f"Messages file {self._messages_path} does not hold a JSON array, ignoring it")
            return []

        messages = [item for item in data if isinstance(item, dict)]
        logger.info(f"Loaded {len(messages)} message(s) from {self._messages_path}")
        return messages

    def save(self, messages: List[Dict[str, Any]]) -> bool:
        """
        Rewrite the messages file with the full history.

        Creates parent directories if needed. Failures are logged and the
        caller keeps its in-memory list.

        Args:
            messages: Full history, newest first

        Returns:
            True if the file was written
        """
        try:
            self._messages_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._messages_path, 'w', encoding='utf-8') as f:
                json.dump(messages, f, indent=2, ensure_ascii=False)
            logger.debug(f"Saved {len(messages)} message(s) to {self._messages_path}")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving messages to {self._messages_path}: {e}")
            return False
