"""Configuration settings for the hub server."""

import os
from pathlib import Path

from common.constants import DEFAULT_PORT


HUB_HOST = os.environ.get("PIHUB_HOST", "0.0.0.0")

HUB_PORT = int(os.environ.get("PORT", str(DEFAULT_PORT)))

UPLOADS_DIR = Path(os.environ.get("PIHUB_UPLOADS_DIR", "./uploads"))

MESSAGES_FILE = Path(os.environ.get("PIHUB_MESSAGES_FILE", "./messages.json"))

DIST_DIR = Path(os.environ.get("PIHUB_DIST_DIR", "./dist"))

DISK_USAGE_PATH = os.environ.get("PIHUB_DISK_PATH", "/")
