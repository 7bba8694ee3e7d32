"""
Enumeration of any fsspec filesystem (`memory://`, `s3://`, ...) via
`AbstractFileSystem.ls(detail=True)`.
"""

from __future__ import annotations

import contextlib
from typing import Any, Generator, Iterator

import fsspec

from filespyder.fs.base import Enumerator, RawEntry
from filespyder.model import FileAttributes
from filespyder.model.entry import ensure_datetime

CREATED_AT_KEYS = ("created", "created_at", "ctime")
MODIFIED_AT_KEYS = ("mtime", "updated_at", "LastModified", "Last-Modified")
ACCESSED_AT_KEYS = ("atime",)


def _first(info: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if info.get(key) is not None:
            return info[key]
    return None


def make_entry(info: dict[str, Any]) -> RawEntry:
    name = str(info["name"]).rstrip("/").rsplit("/", 1)[-1]
    attributes = 0
    if info.get("type") == "directory":
        attributes |= FileAttributes.DIRECTORY
    if info.get("islink"):
        attributes |= FileAttributes.REPARSE_POINT
    if name.startswith("."):
        attributes |= FileAttributes.HIDDEN
    return RawEntry(
        name=name,
        attributes=attributes or FileAttributes.NORMAL,
        size=int(info.get("size") or 0),
        created_at=ensure_datetime(_first(info, CREATED_AT_KEYS)),
        accessed_at=ensure_datetime(_first(info, ACCESSED_AT_KEYS)),
        modified_at=ensure_datetime(_first(info, MODIFIED_AT_KEYS)),
    )


class FsspecEnumerator(Enumerator):
    """
    Enumerate directories of a fsspec filesystem. If no filesystem instance is
    given, it is inferred from each path (`fsspec.url_to_fs`).

    Example:
        ```python
        from filespyder import SearchRequest, search
        from filespyder.fs import FsspecEnumerator

        outcome = search(
            SearchRequest(root_path="memory://data", pattern="*.json", recurse=True),
            enumerator=FsspecEnumerator(),
        )
        ```
    """

    sep = "/"

    def __init__(
        self, fs: fsspec.AbstractFileSystem | None = None, **storage_options: Any
    ) -> None:
        self.fs = fs
        self.storage_options = storage_options

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.fs})>"

    def resolve(self, path: str) -> tuple[fsspec.AbstractFileSystem, str]:
        if self.fs is not None:
            return self.fs, self.fs._strip_protocol(path)
        return fsspec.url_to_fs(path, **self.storage_options)

    @contextlib.contextmanager
    def open(
        self, path: str, large_fetch: bool = False
    ) -> Generator[Iterator[RawEntry], None, None]:
        fs, fs_path = self.resolve(path)
        if not fs.isdir(fs_path):
            if fs.exists(fs_path):
                raise NotADirectoryError(f"Not a directory: `{path}`")
            raise FileNotFoundError(f"No such directory: `{path}`")
        infos = fs.ls(fs_path, detail=True)
        yield (make_entry(info) for info in infos)
