from os import PathLike
from typing import Any

from pydantic import field_validator, model_validator

from filespyder.logic.path import strip_file_scheme
from filespyder.model.base import BaseModel
from filespyder.settings import Settings

# request field -> settings field providing its default
SETTINGS_DEFAULTS = {
    "suppress_errors": "suppress_errors",
    "use_large_fetch_hint": "large_fetch",
    "strict": "strict",
    "follow_symlinks": "follow_symlinks",
    "max_workers": "max_workers",
    "parallel_depth": "parallel_depth",
}


class SearchRequest(BaseModel):
    """The parameters of one search. The same request applies to every
    directory of the search, the engine carries the current directory and its
    depth alongside it."""

    root_path: str
    """Directory to search in, a local path or a fsspec uri (`memory://...`)"""

    pattern: str = "*"
    """Wildcard pattern for entry names (`*`, `?`, `;` separated)"""

    include_directory_matches: bool = False
    """Match directories against the pattern too (only those not recursed into)"""

    recurse: bool = False
    """Search subdirectories"""

    parallel: bool = False
    """Search subdirectories concurrently"""

    suppress_errors: bool = False
    """Don't record (or raise) failures for directories that can't be enumerated"""

    use_large_fetch_hint: bool = False
    """Ask the host for a larger enumeration buffer (windows only)"""

    strict: bool = True
    """Raise on unanticipated failures, otherwise record them as `other`"""

    follow_symlinks: bool = False
    """Recurse into symlinked (reparse point) directories"""

    collect_hidden: bool = False
    """Report hidden entries in `SearchOutcome.hidden`"""

    max_workers: int | None = None
    """Worker pool size for parallel searches"""

    parallel_depth: int | None = None
    """Deepest level (root = 0) whose subdirectories are still dispatched
    concurrently, `None` for every level"""

    @model_validator(mode="before")
    @classmethod
    def apply_settings(cls, values: Any) -> Any:
        """Fill unset options from the environment (`FILESPYDER_*`)"""
        if isinstance(values, dict):
            missing = [f for f in SETTINGS_DEFAULTS if values.get(f) is None]
            if missing:
                settings = Settings()
                values = {**values}
                for field in missing:
                    values[field] = getattr(settings, SETTINGS_DEFAULTS[field])
        return values

    @field_validator("root_path", mode="before")
    @classmethod
    def ensure_path(cls, v: Any) -> Any:
        # an empty root is accepted, it fails to open like any missing directory
        if isinstance(v, PathLike):
            v = str(v)
        if isinstance(v, str):
            return strip_file_scheme(v)
        return v

    def is_parallel_at(self, depth: int) -> bool:
        """Whether subdirectories found at `depth` are dispatched concurrently"""
        if not (self.parallel and self.recurse):
            return False
        return self.parallel_depth is None or depth <= self.parallel_depth
