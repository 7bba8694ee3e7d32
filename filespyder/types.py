from os import PathLike
from pathlib import Path
from typing import Iterable, TypeAlias

Uri: TypeAlias = PathLike | Path | str
Pattern: TypeAlias = str | Iterable[str]
