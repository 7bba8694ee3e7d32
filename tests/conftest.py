import logging
import os
from uuid import uuid4

import fsspec
import pytest


@pytest.fixture
def tree(tmp_path):
    """Create a small directory tree for search tests.

    tree/
      a.txt
      b.json
      README.TXT
      report.txtx
      .hidden.txt
      empty/
      sub/
        c.txt
        deep/
          d.txt
          e.json
    """
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.json").write_text("b")
    (tmp_path / "README.TXT").write_text("readme")
    (tmp_path / "report.txtx").write_text("report")
    (tmp_path / ".hidden.txt").write_text("hidden")
    (tmp_path / "empty").mkdir()
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("c")
    deep = sub / "deep"
    deep.mkdir()
    (deep / "d.txt").write_text("d")
    (deep / "e.json").write_text("e")
    return tmp_path


@pytest.fixture
def wide_tree(tmp_path):
    """5 x 4 x 3 directories with two files each"""
    for i in range(5):
        for j in range(4):
            for k in range(3):
                path = tmp_path / f"d{i}" / f"d{j}" / f"d{k}"
                path.mkdir(parents=True)
                (path / f"f{i}{j}{k}.txt").write_text("x")
                (path / f"f{i}{j}{k}.bin").write_bytes(b"x")
    return tmp_path


@pytest.fixture
def memory_tree():
    """The same layout as `tree` on a fsspec memory filesystem"""
    fs = fsspec.filesystem("memory")
    root = f"/{uuid4().hex}"
    fs.pipe_file(f"{root}/a.txt", b"a")
    fs.pipe_file(f"{root}/b.json", b"b")
    fs.pipe_file(f"{root}/README.TXT", b"readme")
    fs.pipe_file(f"{root}/report.txtx", b"report")
    fs.pipe_file(f"{root}/sub/c.txt", b"c")
    fs.pipe_file(f"{root}/sub/deep/d.txt", b"d")
    fs.pipe_file(f"{root}/sub/deep/e.json", b"e")
    yield f"memory://{root}"
    fs.rm(root, recursive=True)


@pytest.fixture
def is_root():
    return hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.fixture(autouse=True)
def reset_log_handlers():
    yield
    logging.getLogger().handlers.clear()
