"""
Thread-safe accumulation of search results across traversal branches
"""

import threading
from typing import TYPE_CHECKING, Iterable

from filespyder.model import EntryRecord, FailureRecord, SearchOutcome

if TYPE_CHECKING:
    from filespyder.search import DirectoryResult


class ResultAggregator:
    """
    Collect matches, failures and hidden entries from concurrent branches.
    One lock guards all three collections, every item appended is present in
    the final outcome. No ordering guarantee between concurrent callers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._matches: list[EntryRecord] = []
        self._failures: list[FailureRecord] = []
        self._hidden: list[str] = []

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(matches={self.match_count}, "
            f"failures={self.failure_count})>"
        )

    def add_matches(self, batch: Iterable[EntryRecord]) -> None:
        batch = list(batch)
        with self._lock:
            self._matches.extend(batch)

    def add_failures(self, batch: Iterable[FailureRecord]) -> None:
        batch = list(batch)
        with self._lock:
            self._failures.extend(batch)

    def add_hidden(self, batch: Iterable[str]) -> None:
        batch = list(batch)
        with self._lock:
            self._hidden.extend(batch)

    def add(self, result: "DirectoryResult") -> None:
        """Merge the results of one directory at once"""
        with self._lock:
            self._matches.extend(result.matches)
            self._failures.extend(result.failures)
            self._hidden.extend(result.hidden)

    @property
    def match_count(self) -> int:
        with self._lock:
            return len(self._matches)

    @property
    def failure_count(self) -> int:
        with self._lock:
            return len(self._failures)

    def outcome(self) -> SearchOutcome:
        with self._lock:
            return SearchOutcome(
                matches=list(self._matches),
                failures=list(self._failures),
                hidden=list(self._hidden),
            )
