"""File service for upload, listing, download and delete."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple
import logging

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from common.constants import MAX_UPLOAD_BYTES
from hub import config
from hub.exceptions import StoredFileNotFoundError
from hub.storage import (
    clean_original_name,
    copy_stream,
    create_upload_file,
    delete_stored_file,
    ensure_uploads_directory,
    iter_stored_files,
    resolve_stored_path,
)
from hub.types import StoredFile
from hub.utils import current_millis, guess_media_type, strip_timestamp_prefix

logger = logging.getLogger(__name__)


class FileService:
    def __init__(self, uploads_dir: Optional[Path] = None, max_upload_bytes: int = MAX_UPLOAD_BYTES):
        self.uploads_dir = Path(uploads_dir) if uploads_dir is not None else config.UPLOADS_DIR
        self.max_upload_bytes = max_upload_bytes
        ensure_uploads_directory(self.uploads_dir)

    async def save_uploads(self, uploads: List[UploadFile]) -> List[StoredFile]:
        """
        Write each multipart file to the upload directory.

        Args:
            uploads: Files from the "files" form field

        Returns:
            StoredFile for every written file, in request order

        Raises:
            UploadTooLargeError: If any file exceeds the size cap (that file is removed)
        """
        stored = []
        for upload in uploads:
            stored_file = await run_in_threadpool(self._write_upload, upload)
            stored.append(stored_file)
        logger.info(f"Stored {len(stored)} uploaded file(s) in {self.uploads_dir}")
        return stored

    def _write_upload(self, upload: UploadFile) -> StoredFile:
        original_name = clean_original_name(upload.filename)
        uploaded_at = datetime.now(timezone.utc)
        path, handle = create_upload_file(self.uploads_dir, original_name, current_millis())

        try:
            with handle:
                upload.file.seek(0)
                size = copy_stream(upload.file, handle, self.max_upload_bytes)
        except Exception:
            delete_stored_file(path)
            logger.warning(f"Upload of {original_name} aborted, removed partial file {path.name}")
            raise

        logger.info(f"Wrote upload {path.name} ({size} bytes)")

        return StoredFile(
            filename=path.name,
            name=original_name,
            size=size,
            media_type=upload.content_type or guess_media_type(original_name),
            uploaded_at=uploaded_at,
        )

    def list_files(self) -> List[StoredFile]:
        """
        Scan the upload directory.

        Returns:
            StoredFile per regular file, newest first (by timestamp-prefixed name)
        """
        files = []
        for path in iter_stored_files(self.uploads_dir):
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            files.append(
                StoredFile(
                    filename=path.name,
                    name=strip_timestamp_prefix(path.name),
                    size=stat.st_size,
                    media_type=guess_media_type(path.name),
                    uploaded_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                )
            )
        files.sort(key=_sort_key, reverse=True)
        return files

    def get_download(self, filename: str) -> Tuple[Path, str]:
        """
        Locate a stored file for download.

        Args:
            filename: Disk filename

        Returns:
            Tuple of (path, display name with the timestamp prefix stripped)

        Raises:
            InvalidFilenameError: If the name escapes the upload directory
            StoredFileNotFoundError: If no such file exists
        """
        path = resolve_stored_path(self.uploads_dir, filename)
        if not path.is_file():
            raise StoredFileNotFoundError("File not found")
        return path, strip_timestamp_prefix(filename)

    def delete_file(self, filename: str) -> bool:
        """
        Unlink a stored file if present.

        Args:
            filename: Disk filename

        Returns:
            True if a file was removed, False if there was nothing to remove
        """
        path = resolve_stored_path(self.uploads_dir, filename)
        deleted = delete_stored_file(path)
        if deleted:
            logger.info(f"Deleted stored file {filename}")
        else:
            logger.debug(f"Delete requested for missing file {filename}")
        return deleted


def _sort_key(stored_file: StoredFile) -> Tuple[int, str]:
    prefix = stored_file.filename.split('-', 1)[0]
    stamp = int(prefix) if prefix.isdigit() else 0
    return stamp, stored_file.filename
