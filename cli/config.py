"""Configuration management for the Pi Hub CLI."""

import json
import os
import shutil
from pathlib import Path

from common.constants import DEFAULT_PORT


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "hub_host": "localhost",
        "hub_port": DEFAULT_PORT,
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "sender": "Terminal",
    }

    @classmethod
    def defaults(cls) -> dict:
        """
        Default settings with environment overrides applied.

        PIHUB_HUB_HOST and PORT pick the hub to talk to when no config file
        sets them. PIHUB_HOST is the server's bind address and is not read here.

        Returns:
            Fresh configuration dictionary
        """
        config = dict(cls.DEFAULT_CONFIG)
        config["hub_host"] = os.environ.get("PIHUB_HUB_HOST", config["hub_host"])
        port = os.environ.get("PORT")
        if port and port.isdigit():
            config["hub_port"] = int(port)
        return config

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.pihub/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.pihub' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.defaults()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError):
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError:
                    pass
                return self.defaults()
        else:
            config = self.defaults()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError:
                pass
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError:
            pass

    def get_sender(self) -> str:
        """
        Get the sender name attached to outgoing chat messages.

        Returns:
            Sender display name
        """
        return self.data.get('sender') or 'Terminal'

    def set_sender(self, sender: str) -> None:
        """
        Set sender name and save to file.

        Args:
            sender: Display name for outgoing chat messages
        """
        self.data['sender'] = sender
        self.save()

    def get_base_url(self) -> str:
        """
        Get hub base URL.

        Returns:
            Base URL string (e.g., "http://localhost:3001")
        """
        host = self.data.get('hub_host', 'localhost')
        port = self.data.get('hub_port', DEFAULT_PORT)
        return f"http://{host}:{port}"

    def get_ws_url(self) -> str:
        """
        Get chat socket URL.

        Returns:
            WebSocket URL string (e.g., "ws://localhost:3001/ws")
        """
        host = self.data.get('hub_host', 'localhost')
        port = self.data.get('hub_port', DEFAULT_PORT)
        return f"ws://{host}:{port}/ws"

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }
