from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filespyder.model import SearchOutcome


class SpyderError(Exception):
    pass


class EnumerationError(SpyderError, OSError):
    """An unanticipated failure while opening or reading a directory. It is
    raised (and terminates the whole search) unless errors are suppressed or
    the search runs in non-strict mode."""

    def __init__(self, path: str, code: int | None = None, message: str = "") -> None:
        self.path = path
        self.code = code
        super().__init__(code, message or f"Can't enumerate directory: `{path}`")

    def __str__(self) -> str:
        return f"[{self.code}] {self.strerror}: `{self.path}`"


class SearchCancelled(SpyderError):
    """The search was cancelled, `outcome` holds what was found so far"""

    def __init__(self, outcome: "SearchOutcome") -> None:
        self.outcome = outcome
        super().__init__(
            f"Search cancelled after {outcome.match_count} matches "
            f"and {outcome.failure_count} failures"
        )
