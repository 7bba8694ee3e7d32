from filespyder.fs.base import Enumerator, RawEntry
from filespyder.fs.local import LocalEnumerator
from filespyder.fs.remote import FsspecEnumerator
from filespyder.logic.constants import IS_WINDOWS
from filespyder.logic.path import is_local
from filespyder.types import Uri


def get_enumerator(root: Uri | None = None) -> Enumerator:
    """
    Pick the enumeration backend for the given search root: fsspec for uris
    with a (non-file) scheme, the native find api on windows and `os.scandir`
    elsewhere.
    """
    if root is not None and not is_local(root):
        return FsspecEnumerator()
    if IS_WINDOWS:
        from filespyder.fs.win32 import Win32Enumerator

        return Win32Enumerator()
    return LocalEnumerator()


__all__ = [
    "Enumerator",
    "RawEntry",
    "LocalEnumerator",
    "FsspecEnumerator",
    "get_enumerator",
]
