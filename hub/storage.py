"""Manages uploaded files on disk: naming, streaming writes, lookup and unlink."""

from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator, Optional, Tuple

from common.constants import UPLOAD_COPY_BUFFER_BYTES
from hub.exceptions import InvalidFilenameError, UploadTooLargeError
from hub.utils import current_millis


DEFAULT_ORIGINAL_NAME = "upload"


def ensure_uploads_directory(uploads_dir: Path) -> None:
    """Ensure uploads directory exists."""
    uploads_dir.mkdir(parents=True, exist_ok=True)


def clean_original_name(original_name: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to its last path component.

    Args:
        original_name: Filename from the multipart part (may contain a path)

    Returns:
        Bare filename, or "upload" when nothing usable remains
    """
    if not original_name:
        return DEFAULT_ORIGINAL_NAME
    name = PurePosixPath(original_name.replace('\\', '/')).name
    if name in ('', '.', '..'):
        return DEFAULT_ORIGINAL_NAME
    return name


def resolve_stored_path(uploads_dir: Path, filename: str) -> Path:
    """
    Get the on-disk path for a stored filename.

    Args:
        uploads_dir: Upload directory
        filename: Disk filename as used in URLs

    Returns:
        Path object inside the upload directory

    Raises:
        InvalidFilenameError: If the name is empty or escapes the upload directory
    """
    if not filename or filename in ('.', '..') or '/' in filename or '\\' in filename:
        raise InvalidFilenameError(f"Invalid filename: {filename!r}")

    base = uploads_dir.resolve()
    candidate = (base / filename).resolve()
    if candidate.parent != base:
        raise InvalidFilenameError(f"Invalid filename: {filename!r}")
    return candidate


def create_upload_file(
    uploads_dir: Path,
    original_name: str,
    timestamp_ms: Optional[int] = None
) -> Tuple[Path, BinaryIO]:
    """
    Create a new, empty file named "<epochMillis>-<originalName>".

    The file is opened in exclusive-create mode; if the name is taken the
    timestamp is bumped until a free name is found, so an upload never
    replaces an existing file.

    Args:
        uploads_dir: Upload directory
        original_name: Cleaned original filename
        timestamp_ms: Upload time in epoch milliseconds (defaults to now)

    Returns:
        Tuple of (path, open binary file handle positioned at 0)
    """
    ensure_uploads_directory(uploads_dir)
    timestamp = timestamp_ms if timestamp_ms is not None else current_millis()

    while True:
        path = uploads_dir / f"{timestamp}-{original_name}"
        try:
            handle = open(path, 'xb')
        except FileExistsError:
            timestamp += 1
            continue
        return path, handle


def copy_stream(source: BinaryIO, destination: BinaryIO, max_bytes: int) -> int:
    """
    Copy a readable stream into an open file, enforcing a size cap.

    Args:
        source: Readable binary stream (the spooled multipart part)
        destination: Writable binary file
        max_bytes: Largest number of bytes allowed

    Returns:
        Number of bytes written

    Raises:
        UploadTooLargeError: If the source holds more than max_bytes
        OSError: If the write fails
    """
    written = 0
    while True:
        piece = source.read(UPLOAD_COPY_BUFFER_BYTES)
        if not piece:
            break
        written += len(piece)
        if written > max_bytes:
            raise UploadTooLargeError(f"File exceeds the {max_bytes} byte upload limit")
        destination.write(piece)
    return written


def iter_stored_files(uploads_dir: Path) -> Iterator[Path]:
    """
    Iterate over regular, non-hidden files in the upload directory.

    Args:
        uploads_dir: Upload directory

    Yields:
        Path of each stored file
    """
    if not uploads_dir.exists():
        return
    for entry in uploads_dir.iterdir():
        if entry.name.startswith('.'):
            continue
        if entry.is_file():
            yield entry


def delete_stored_file(path: Path) -> bool:
    """
    Delete a stored file from disk.

    Args:
        path: Resolved path of the stored file

    Returns:
        True if file was deleted, False if there was no regular file to delete
    """
    if not path.is_file():
        return False
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
