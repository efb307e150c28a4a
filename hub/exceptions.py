"""Custom exception classes for the hub server."""


class HubException(Exception):
    """
    Base exception class for all hub errors.
    """
    pass


class StoredFileNotFoundError(HubException):
    """
    Raised when a requested file is not in the upload directory.
    """
    pass


class InvalidFilenameError(HubException):
    """
    Raised when a filename is empty or resolves outside the upload directory.
    """
    pass


class UploadTooLargeError(HubException):
    """
    Raised when a single uploaded file exceeds the per-file size cap.
    """
    pass
