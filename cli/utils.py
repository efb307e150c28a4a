"""Utility functions for CLI operations."""

import re
import sys
from cli.constants import GREEN, RESET


TIMESTAMP_PREFIX = re.compile(r'^\d+-')

DEFAULT_READ_SIZE = 64 * 1024


class ProgressLine:
    """One terminal line rewritten in place as a transfer advances."""

    def __init__(self, verb: str, label: str, total: int):
        """
        Args:
            verb: Leading word, e.g. "Uploading" or "Downloading"
            label: File name shown on the line
            total: Expected byte count (0 when unknown)
        """
        self.verb = verb
        self.label = label
        self.total = total
        self.done = 0
        self.finished = False

    def advance(self, count: int) -> None:
        self.done += count
        line = f"\r{self.verb} {self.label}: {format_file_size(self.done)}"
        if self.total > 0:
            percent = min(self.done / self.total, 1.0) * 100
            line += f" / {format_file_size(self.total)} ({GREEN}{percent:.1f}%{RESET})"
        sys.stdout.write(line)
        sys.stdout.flush()

    def finish(self) -> None:
        if self.finished:
            return
        self.finished = True
        sys.stdout.write('\n')
        sys.stdout.flush()

    @staticmethod
    def clear() -> None:
        """Blank the current line after an aborted transfer."""
        sys.stdout.write('\r' + ' ' * 100 + '\r')
        sys.stdout.flush()


class ProgressFileWrapper:
    """Readable file for httpx multipart bodies; each read advances an upload progress line."""

    def __init__(self, file_path: str, file_size: int, filename: str):
        self._file = open(file_path, 'rb')
        self.progress = ProgressLine("Uploading", filename, file_size)

    def read(self, size: int = -1) -> bytes:
        chunk = self._file.read(size if size > 0 else DEFAULT_READ_SIZE)
        if chunk:
            self.progress.advance(len(chunk))
        else:
            self.progress.finish()
        return chunk

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> 'ProgressFileWrapper':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count with binary units (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = size_bytes / 1024.0
    for unit in ('KiB', 'MiB', 'GiB', 'TiB'):
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def display_name(filename: str) -> str:
    """Hub filename without its "<epochMillis>-" prefix."""
    return TIMESTAMP_PREFIX.sub('', filename, count=1)
