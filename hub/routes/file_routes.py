"""File transfer API routes."""

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from common.constants import DOWNLOAD_PATH_PREFIX
from hub.schemas.files import DeleteFileResponse, StoredFileResponse, UploadResponse
from hub.service_locator import get_file_service
from hub.services.file_service import FileService
from hub.types import StoredFile
from hub.utils import guess_media_type, isoformat_utc

router = APIRouter(prefix="/api", tags=["Files"])


def to_file_response(stored_file: StoredFile) -> StoredFileResponse:
    """Build the wire descriptor for a stored file."""
    return StoredFileResponse(
        id=stored_file.filename,
        name=stored_file.name,
        size=stored_file.size,
        media_type=stored_file.media_type,
        upload_date=isoformat_utc(stored_file.uploaded_at),
        filename=stored_file.filename,
        path=f"{DOWNLOAD_PATH_PREFIX}{stored_file.filename}",
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_files(
    files: List[UploadFile] = File(...),
    file_service: FileService = Depends(get_file_service)
):
    """
    Upload one or more files.

    Parameters:
        - files: Files to upload (multipart/form-data, repeated "files" field)

    Returns:
        - success: true
        - files: Descriptor per stored file (id, name, size, type, uploadDate, filename, path)

    Raises:
        - 413: A file exceeds the 25 GiB per-file limit
        - 422: No "files" field in the form
    """
    stored = await file_service.save_uploads(files)
    return UploadResponse(files=[to_file_response(f) for f in stored])


@router.get("/download/{filename}")
def download_file(
    filename: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Download a stored file by its disk filename.

    The attachment is named after the original upload name (timestamp
    prefix removed).

    Raises:
        - 400: Filename escapes the upload directory
        - 404: File not found
    """
    path, display_name = file_service.get_download(filename)
    return FileResponse(
        path,
        media_type=guess_media_type(display_name),
        filename=display_name,
    )


@router.delete("/files/{filename}", response_model=DeleteFileResponse)
def delete_file(
    filename: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Delete a stored file. Deleting a file that does not exist also succeeds.

    Raises:
        - 400: Filename escapes the upload directory
    """
    file_service.delete_file(filename)
    return DeleteFileResponse()


@router.get("/files", response_model=List[StoredFileResponse])
def list_files(file_service: FileService = Depends(get_file_service)):
    """
    List stored files, newest first.
    """
    return [to_file_response(f) for f in file_service.list_files()]
