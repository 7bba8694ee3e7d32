"""
# Entries

Records for matched directory entries and for directories that couldn't be
enumerated.
"""

from datetime import datetime, timezone
from enum import IntFlag, StrEnum
from typing import Any

from pydantic import field_validator

from filespyder.model.base import BaseModel


class FileAttributes(IntFlag):
    """Entry attribute bitmask, using the windows `FILE_ATTRIBUTE_*` values
    on every platform"""

    READONLY = 0x1
    HIDDEN = 0x2
    SYSTEM = 0x4
    DIRECTORY = 0x10
    ARCHIVE = 0x20
    NORMAL = 0x80
    REPARSE_POINT = 0x400


class FailureReason(StrEnum):
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    INTERRUPTED = "interrupted"
    OTHER = "other"


def ensure_datetime(val: Any) -> datetime | None:
    """Coerce int/float timestamps and date strings to utc datetime."""
    if val is None:
        return None
    if isinstance(val, datetime):
        if val.tzinfo is None:
            val = val.replace(tzinfo=timezone.utc)
        return val
    if isinstance(val, (int, float)):
        return datetime.fromtimestamp(val, tz=timezone.utc)
    if isinstance(val, str):
        from dateutil.parser import parse as parse_date

        try:
            return ensure_datetime(parse_date(val))
        except (ValueError, TypeError, OverflowError):
            return None
    return None


class EntryRecord(BaseModel):
    """A directory entry that matched the search pattern"""

    name: str
    """Entry name (last part of the path)"""

    path: str
    """Full path: parent path + separator + name"""

    parent: str
    """Path of the directory the entry was found in"""

    is_directory: bool = False

    attributes: int = FileAttributes.NORMAL
    """Attribute bitmask as reported by the enumeration backend, see
    `FileAttributes`"""

    size: int | None = None
    """Size in bytes, `None` for directories"""

    created_at: datetime | None = None
    accessed_at: datetime | None = None
    modified_at: datetime | None = None

    @field_validator("created_at", "accessed_at", "modified_at", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> datetime | None:
        return ensure_datetime(v)

    @property
    def is_hidden(self) -> bool:
        return FileAttributes.HIDDEN in self.flags

    @property
    def flags(self) -> FileAttributes:
        return FileAttributes(self.attributes)

    def __str__(self) -> str:
        return self.path


class FailureRecord(BaseModel):
    """A directory that could not be enumerated"""

    path: str
    """The directory path as it was requested"""

    reason: FailureReason = FailureReason.OTHER

    code: int | None = None
    """Host error code (`errno` or win32 error), if known"""

    message: str | None = None

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.path} ({self.reason}, code {self.code})"
        return f"{self.path} ({self.reason})"
