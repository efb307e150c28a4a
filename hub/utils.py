"""Utility helper functions for the hub."""

import mimetypes
import re
import time
from datetime import datetime, timezone


TIMESTAMP_PREFIX = re.compile(r'^\d+-')


def current_millis() -> int:
    """
    Get the current time as epoch milliseconds.

    Returns:
        Milliseconds since the Unix epoch
    """
    return int(time.time() * 1000)


def isoformat_utc(moment: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision and a Z suffix.

    Args:
        moment: Aware or naive (assumed UTC) datetime

    Returns:
        String like "2024-05-01T12:30:00.123Z"
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return isoformat_utc(datetime.now(timezone.utc))


def strip_timestamp_prefix(filename: str) -> str:
    """
    Recover the display name of a stored file.

    Args:
        filename: Disk filename (e.g., "1714566600123-report.pdf")

    Returns:
        Filename without its leading "<digits>-" prefix ("report.pdf")
    """
    return TIMESTAMP_PREFIX.sub('', filename, count=1)


def guess_media_type(filename: str) -> str:
    """
    Guess a MIME type from a filename extension.

    Args:
        filename: Any filename

    Returns:
        MIME type, or "application/octet-stream" if unknown
    """
    media_type, _ = mimetypes.guess_type(filename)
    return media_type or 'application/octet-stream'


def format_uptime(seconds: float) -> str:
    """
    Format an uptime in seconds as "<d>d <h>h <m>m".

    Zero day and hour parts are omitted; minutes are always present.

    Args:
        seconds: Uptime in seconds

    Returns:
        Formatted uptime (e.g., "2d 3h 15m", "4h 0m", "0m")
    """
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    parts.append(f"{minutes}m")

    return ' '.join(parts)
