"""
# Enumeration backends

An enumerator lists the immediate children of one directory. Opening a
directory is a context manager so the underlying handle is released on every
exit path, including a caller abandoning the iteration half way:

```python
with enumerator.open("/tmp") as entries:
    for entry in entries:
        ...
```

Opening raises `FileNotFoundError`, `PermissionError` or
`NotADirectoryError` for anticipated failures, any other `OSError` is
unanticipated. Errors raised while iterating mean the listing is incomplete.
"""

import errno
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ContextManager, Iterator

from filespyder.logic.constants import SEP
from filespyder.model import FailureReason, FileAttributes

# FILETIME: 100-nanosecond ticks since 1601-01-01 UTC
FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
UINT32_MAX = 0xFFFFFFFF

ANTICIPATED: dict[type[OSError], FailureReason] = {
    FileNotFoundError: FailureReason.NOT_FOUND,
    PermissionError: FailureReason.ACCESS_DENIED,
    NotADirectoryError: FailureReason.NOT_A_DIRECTORY,
}


@dataclass(slots=True, frozen=True)
class RawEntry:
    name: str
    attributes: int
    size: int = 0
    created_at: datetime | None = None
    accessed_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_directory(self) -> bool:
        return bool(self.attributes & FileAttributes.DIRECTORY)

    @property
    def is_hidden(self) -> bool:
        return bool(self.attributes & FileAttributes.HIDDEN)

    @property
    def is_reparse_point(self) -> bool:
        return bool(self.attributes & FileAttributes.REPARSE_POINT)


class Enumerator(ABC):
    sep: str = SEP
    """Separator to join child names to their parent path"""

    @abstractmethod
    def open(
        self, path: str, large_fetch: bool = False
    ) -> ContextManager[Iterator[RawEntry]]:
        """
        Open the directory at `path` for enumeration.

        Args:
            path: Directory path as given by the caller
            large_fetch: Hint to use a larger buffer for the query

        Returns:
            A context manager yielding an iterator of the children
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


def combine_size(high: int, low: int) -> int:
    """Combine the two 32-bit halves of a file size into one unsigned 64-bit
    value"""
    return ((high & UINT32_MAX) << 32) + (low & UINT32_MAX)


def filetime_to_datetime(filetime: int) -> datetime:
    """Convert a windows FILETIME (100ns ticks since 1601) to an utc datetime"""
    return FILETIME_EPOCH + timedelta(microseconds=filetime // 10)


def failure_reason(exc: OSError) -> FailureReason | None:
    """Get the reason for an anticipated open failure, `None` if the error
    isn't anticipated"""
    for exc_type, reason in ANTICIPATED.items():
        if isinstance(exc, exc_type):
            return reason
    if exc.errno == errno.ENOENT:
        return FailureReason.NOT_FOUND
    if exc.errno in (errno.EACCES, errno.EPERM):
        return FailureReason.ACCESS_DENIED
    if exc.errno == errno.ENOTDIR:
        return FailureReason.NOT_A_DIRECTORY
    return None


def error_code(exc: OSError) -> int | None:
    """The most specific host error code: the win32 error if there is one,
    otherwise `errno`"""
    winerror = getattr(exc, "winerror", None)
    if winerror:
        return winerror
    return exc.errno
