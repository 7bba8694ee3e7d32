import os
import sys

import pytest

from filespyder.logic.constants import MAX_PATH

pytestmark = pytest.mark.skipif(sys.platform != "win32", reason="windows only")


def _long_paths_enabled() -> bool:
    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, r"SYSTEM\CurrentControlSet\Control\FileSystem"
        ) as key:
            value, _ = winreg.QueryValueEx(key, "LongPathsEnabled")
            return bool(value)
    except OSError:
        return False


def _long_tree(tmp_path):
    from filespyder.logic.path import extended_length_path

    path = str(tmp_path)
    for ix in range(6):
        path = os.path.join(path, f"{ix}" * 60)
        os.mkdir(extended_length_path(path))
    with open(extended_length_path(os.path.join(path, "deep.txt")), "w") as fh:
        fh.write("deep")
    return path


def test_fs_win32_enumerate(tree):
    from filespyder.fs.win32 import Win32Enumerator

    with Win32Enumerator().open(str(tree), large_fetch=True) as entries:
        entries = {e.name: e for e in entries}
    assert "." in entries  # filtered by the search, not the enumerator
    assert entries["sub"].is_directory
    assert entries["README.TXT"].size == 6
    assert entries["a.txt"].modified_at.tzinfo is not None


def test_fs_win32_open_failures(tree):
    from filespyder.fs.win32 import Win32Enumerator

    with pytest.raises(FileNotFoundError):
        with Win32Enumerator().open(str(tree / "nonexistent")):
            pass
    with pytest.raises(FileNotFoundError):
        with Win32Enumerator().open(""):
            pass


def test_fs_win32_long_path(tmp_path):
    from filespyder import search
    from filespyder.fs.win32 import Win32Enumerator

    path = _long_tree(tmp_path)
    assert len(path) > MAX_PATH
    outcome = search(path, "*.txt", enumerator=Win32Enumerator())
    assert [m.name for m in outcome.matches] == ["deep.txt"]
    assert not outcome.failures


@pytest.mark.skipif(
    sys.platform != "win32" or _long_paths_enabled(), reason="long paths enabled"
)
def test_fs_win32_long_path_without_prefix(tmp_path):
    path = _long_tree(tmp_path)
    with pytest.raises(OSError):
        os.listdir(path)
