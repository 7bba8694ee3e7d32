import os
import sys

import pytest

from filespyder.fs import LocalEnumerator, get_enumerator
from filespyder.fs.local import make_attributes
from filespyder.fs.remote import FsspecEnumerator
from filespyder.logic.constants import MAX_PATH
from filespyder.model import FileAttributes


def _names(enumerator, path):
    with enumerator.open(str(path)) as entries:
        return {e.name: e for e in entries}


def test_fs_local_get_enumerator(tmp_path):
    assert isinstance(get_enumerator("memory://foo"), FsspecEnumerator)
    if sys.platform == "win32":
        from filespyder.fs.win32 import Win32Enumerator

        assert isinstance(get_enumerator(str(tmp_path)), Win32Enumerator)
    else:
        assert isinstance(get_enumerator(str(tmp_path)), LocalEnumerator)
        assert isinstance(get_enumerator(), LocalEnumerator)


def test_fs_local_enumerate(tree):
    entries = _names(LocalEnumerator(), tree)
    assert set(entries) == {
        "a.txt",
        "b.json",
        "README.TXT",
        "report.txtx",
        ".hidden.txt",
        "empty",
        "sub",
    }
    assert "." not in entries
    assert entries["sub"].is_directory
    assert not entries["a.txt"].is_directory
    assert entries["README.TXT"].size == 6
    assert entries["a.txt"].modified_at is not None
    assert entries["a.txt"].modified_at.tzinfo is not None
    assert entries["a.txt"].accessed_at is not None
    assert entries["a.txt"].created_at is not None


@pytest.mark.skipif(sys.platform == "win32", reason="posix attributes")
def test_fs_local_attributes(tree):
    entries = _names(LocalEnumerator(), tree)
    assert entries[".hidden.txt"].is_hidden
    assert not entries["a.txt"].is_hidden
    assert entries["a.txt"].attributes == FileAttributes.NORMAL
    assert entries["sub"].attributes == FileAttributes.DIRECTORY

    os.chmod(tree / "b.json", 0o444)
    entries = _names(LocalEnumerator(), tree)
    assert entries["b.json"].attributes & FileAttributes.READONLY


@pytest.mark.skipif(sys.platform == "win32", reason="posix symlinks")
def test_fs_local_symlinks(tree):
    os.symlink(tree / "sub", tree / "link")
    os.symlink(tree / "missing", tree / "dangling")
    entries = _names(LocalEnumerator(), tree)
    assert entries["link"].is_directory
    assert entries["link"].is_reparse_point
    assert not entries["dangling"].is_directory
    assert entries["dangling"].is_reparse_point


def test_fs_local_make_attributes_native(tree):
    class Stat:
        st_file_attributes = FileAttributes.HIDDEN | FileAttributes.ARCHIVE
        st_mode = 0

    entry = next(e for e in os.scandir(tree) if e.name == "a.txt")
    assert make_attributes(entry, Stat()) == Stat.st_file_attributes


def test_fs_local_empty_dir(tree):
    assert _names(LocalEnumerator(), tree / "empty") == {}


def test_fs_local_open_failures(tree):
    enumerator = LocalEnumerator()
    with pytest.raises(FileNotFoundError):
        with enumerator.open(str(tree / "nonexistent")):
            pass
    with pytest.raises(NotADirectoryError):
        with enumerator.open(str(tree / "a.txt")):
            pass


def test_fs_local_abandon_iteration(tree):
    enumerator = LocalEnumerator()
    with enumerator.open(str(tree)) as entries:
        next(entries)
    # handle is released, the generator is exhausted
    with pytest.raises(StopIteration):
        next(entries)


def test_fs_local_long_path(tmp_path):
    path = tmp_path
    for ix in range(6):
        path = path / (f"{ix}" * 60)
        path.mkdir()
    (path / "deep.txt").write_text("deep")
    assert len(str(path)) > MAX_PATH
    entries = _names(LocalEnumerator(), path)
    assert set(entries) == {"deep.txt"}


@pytest.mark.skipif(sys.platform == "win32", reason="posix symlinks")
def test_fs_local_looping_symlink(tmp_path):
    for name in ("a.txt", "b.txt", "z.txt"):
        (tmp_path / name).write_text(name)
    os.symlink("loop", tmp_path / "loop")
    entries = _names(LocalEnumerator(), tmp_path)
    assert set(entries) == {"a.txt", "b.txt", "z.txt", "loop"}
    # the link itself is listed, it can't be followed
    assert entries["loop"].is_reparse_point
    assert not entries["loop"].is_directory
