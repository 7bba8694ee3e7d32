r"""
Path handling for the host enumeration primitive.

Windows caps regular paths at `MAX_PATH` (260) characters. Routing a path
through the extended-length convention (`\\?\C:\...` or `\\?\UNC\server\share`)
lifts that limit. These helpers are pure string functions: no I/O, no
validation. Garbage in gives a request that fails later at enumeration.
"""

import os
import re
from urllib.parse import unquote, urlparse

from filespyder.logic.constants import (
    FS_PREFIX,
    IS_WINDOWS,
    SCHEME_FILE,
    SEP,
    UNC_MARKER,
    UNC_PREFIX,
    WILDCARD,
    WIN_SEP,
)
from filespyder.types import Uri


def is_extended(path: str) -> bool:
    return path.startswith(FS_PREFIX)


def is_unc(path: str) -> bool:
    return path.startswith(UNC_MARKER) and not is_extended(path)


def extended_length_path(path: Uri) -> str:
    """
    Rewrite a windows path into its extended-length form.

    Examples:
        >>> extended_length_path("C:\\temp")
        "\\\\?\\C:\\temp"
        >>> extended_length_path("\\\\server\\share")
        "\\\\?\\UNC\\server\\share"

    Args:
        path: Local or network (UNC) directory path

    Returns:
        The prefixed path, already prefixed paths are returned as is
    """
    path = str(path)
    if is_extended(path):
        return path
    if is_unc(path):
        return UNC_PREFIX + path[len(UNC_MARKER) :]
    return FS_PREFIX + path


def enumeration_spec(path: Uri) -> str:
    """
    Get the "list all children" spec for `FindFirstFileEx`: the extended
    length path followed by a separator and `*`.
    """
    path = extended_length_path(path)
    if path.endswith(WIN_SEP):
        return path + WILDCARD
    return path + WIN_SEP + WILDCARD


def native_path(path: Uri) -> str:
    """The path to hand to `os.scandir` on this platform. POSIX systems don't
    have the 260 characters ceiling, so the path is left untouched there."""
    path = str(path)
    if IS_WINDOWS and path:
        # extended paths are never normalized by the host, so they must be absolute
        if not is_extended(path):
            path = os.path.abspath(path)
        return extended_length_path(path)
    return path


def join_path(parent: str, name: str, sep: str = SEP) -> str:
    """Join a child name to its parent with exactly one separator"""
    if not parent:
        return name
    if parent.endswith(sep) or (sep != "/" and parent.endswith("/")):
        return parent + name
    return parent + sep + name


def is_local(uri: Uri) -> bool:
    """Check if the given root is on the local filesystem (no scheme, a
    windows drive letter or `file://`)"""
    uri = str(uri)
    scheme = urlparse(uri).scheme
    # "C:\\foo" parses with scheme "c"
    return not scheme or len(scheme) == 1 or scheme == SCHEME_FILE


def strip_file_scheme(uri: Uri) -> str:
    """Turn `file://` uris into plain local paths, leave everything else"""
    uri = str(uri)
    if uri.startswith(f"{SCHEME_FILE}://"):
        path = unquote(urlparse(uri).path) or SEP
        # file:///C:/temp
        if re.match(r"^/[A-Za-z]:", path):
            path = path[1:]
        return path
    return uri
