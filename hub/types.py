"""Hub-specific data type definitions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StoredFile:
    """
    A file in the upload directory, as seen through its disk name and stat.
    """
    filename: str
    name: str
    size: int
    media_type: str
    uploaded_at: datetime
