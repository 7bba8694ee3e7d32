"""
Local filesystem enumeration via `os.scandir`.
"""

import contextlib
import os
import stat
from datetime import datetime, timezone
from typing import Generator, Iterator

from filespyder.fs.base import Enumerator, RawEntry
from filespyder.logging import get_logger
from filespyder.logic.path import native_path
from filespyder.model import FileAttributes

log = get_logger(__name__)


def _ts(value: float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def make_attributes(entry: os.DirEntry, st: os.stat_result) -> int:
    """Use the native attribute bitmask where the platform has one (windows),
    otherwise derive it from the entry"""
    native = getattr(st, "st_file_attributes", None)
    if native is not None:
        return native
    attributes = 0
    if stat.S_ISDIR(st.st_mode):
        attributes |= FileAttributes.DIRECTORY
    if entry.is_symlink():
        attributes |= FileAttributes.REPARSE_POINT
    if entry.name.startswith("."):
        attributes |= FileAttributes.HIDDEN
    if not st.st_mode & stat.S_IWUSR:
        attributes |= FileAttributes.READONLY
    return attributes or FileAttributes.NORMAL


def make_entry(entry: os.DirEntry) -> RawEntry | None:
    try:
        st = entry.stat()
    except OSError:
        # dangling or looping symlink, unreadable link target, removed since listing
        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            log.debug(f"Can't stat entry: `{entry.path}`", error=str(e))
            return None
    attributes = make_attributes(entry, st)
    return RawEntry(
        name=entry.name,
        attributes=attributes,
        size=st.st_size,
        created_at=_ts(getattr(st, "st_birthtime", st.st_ctime)),
        accessed_at=_ts(st.st_atime),
        modified_at=_ts(st.st_mtime),
    )


class LocalEnumerator(Enumerator):
    """Enumerate directories on the local filesystem. On windows paths are
    handed over in their extended-length form. The large fetch hint has no
    equivalent for `os.scandir` and is ignored."""

    def _iter_entries(self, it: Iterator[os.DirEntry]) -> Generator[RawEntry, None, None]:
        for entry in it:
            raw = make_entry(entry)
            if raw is not None:
                yield raw

    @contextlib.contextmanager
    def open(
        self, path: str, large_fetch: bool = False
    ) -> Generator[Iterator[RawEntry], None, None]:
        with os.scandir(native_path(path)) as it:
            entries = self._iter_entries(it)
            try:
                yield entries
            finally:
                entries.close()
