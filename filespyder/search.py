"""
# Search

The traversal engine: enumerate a directory, sort its children into matches,
subdirectories to descend into and (optionally) hidden entries, then recurse
sequentially or concurrently and merge everything into one `SearchOutcome`.

Example:
    ```python
    from filespyder import search

    outcome = search("/var/log", "*.log;*.gz", recurse=True, parallel=True)
    for entry in outcome.matches:
        print(entry.path, entry.size)
    for failure in outcome.failures:
        print("skipped", failure.path, failure.reason)
    ```
"""

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Generator

from filespyder.aggregate import ResultAggregator
from filespyder.exceptions import EnumerationError, SearchCancelled
from filespyder.fs import Enumerator, RawEntry, get_enumerator
from filespyder.fs.base import error_code, failure_reason
from filespyder.logging import get_logger
from filespyder.logic.constants import SELF_AND_PARENT
from filespyder.logic.match import match_name
from filespyder.logic.path import join_path
from filespyder.model import (
    EntryRecord,
    FailureReason,
    FailureRecord,
    SearchOutcome,
    SearchRequest,
)
from filespyder.types import Uri
from filespyder.util import Took

log = get_logger(__name__)

Pending = list[tuple[str, int]]


@dataclass(slots=True)
class DirectoryResult:
    """What one directory contributed to the search"""

    path: str
    depth: int
    matches: list[EntryRecord] = field(default_factory=list)
    failures: list[FailureRecord] = field(default_factory=list)
    hidden: list[str] = field(default_factory=list)
    subdirectories: list[str] = field(default_factory=list)


def _message(exc: OSError) -> str:
    return exc.strerror or str(exc)


class Spyder:
    """
    Runs one search. Instances hold no state beyond the request, so a new one
    is created per call to `search`.

    Args:
        request: The search parameters
        enumerator: Backend to list directories with, inferred from the root
            path if omitted
        cancel: Checked before each directory is opened, once set the search
            stops and `SearchCancelled` is raised with the partial outcome
    """

    def __init__(
        self,
        request: SearchRequest,
        enumerator: Enumerator | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self.request = request
        self.enumerator = enumerator or get_enumerator(request.root_path)
        self.cancel = cancel

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.request.root_path}, {self.enumerator})>"

    @property
    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def make_record(self, parent: str, path: str, entry: RawEntry) -> EntryRecord:
        return EntryRecord(
            name=entry.name,
            path=path,
            parent=parent,
            is_directory=entry.is_directory,
            attributes=entry.attributes,
            size=None if entry.is_directory else entry.size,
            created_at=entry.created_at,
            accessed_at=entry.accessed_at,
            modified_at=entry.modified_at,
        )

    def classify(self, result: DirectoryResult, entry: RawEntry) -> None:
        request = self.request
        if entry.name in SELF_AND_PARENT:
            return
        path = join_path(result.path, entry.name, self.enumerator.sep)
        if request.collect_hidden and entry.is_hidden:
            result.hidden.append(path)
        if entry.is_directory:
            if request.recurse:
                # directories are never tested against the pattern when recursing
                if request.follow_symlinks or not entry.is_reparse_point:
                    result.subdirectories.append(path)
                return
            if not request.include_directory_matches:
                return
        if match_name(entry.name, request.pattern):
            result.matches.append(self.make_record(result.path, path, entry))

    def open_failed(self, result: DirectoryResult, exc: OSError) -> None:
        reason = failure_reason(exc)
        code = error_code(exc)
        if self.request.suppress_errors:
            log.debug(
                "Skipping directory", path=result.path, reason=reason, code=code
            )
            return
        if reason is None:
            if self.request.strict:
                raise EnumerationError(result.path, code, _message(exc)) from exc
            reason = FailureReason.OTHER
        log.warning(
            f"Can't enumerate directory: `{result.path}`",
            reason=str(reason),
            code=code,
        )
        result.failures.append(
            FailureRecord(
                path=result.path, reason=reason, code=code, message=_message(exc)
            )
        )

    def interrupted(self, result: DirectoryResult, exc: OSError) -> None:
        code = error_code(exc)
        log.warning(
            f"Enumeration interrupted: `{result.path}`",
            entries=len(result.matches) + len(result.subdirectories),
            code=code,
            error=_message(exc),
        )
        if not self.request.suppress_errors:
            result.failures.append(
                FailureRecord(
                    path=result.path,
                    reason=FailureReason.INTERRUPTED,
                    code=code,
                    message=_message(exc),
                )
            )

    def scan(self, path: str, depth: int = 0) -> DirectoryResult:
        """
        Enumerate a single directory without descending into it.

        Raises:
            EnumerationError: For unanticipated open failures in strict mode
        """
        result = DirectoryResult(path=path, depth=depth)
        log.debug("Enumerating directory", path=path, depth=depth)
        try:
            with self.enumerator.open(
                path, large_fetch=self.request.use_large_fetch_hint
            ) as entries:
                try:
                    for entry in entries:
                        self.classify(result, entry)
                except OSError as e:
                    self.interrupted(result, e)
        except OSError as e:
            self.open_failed(result, e)
        return result

    def walk(self, path: str, depth: int = 0) -> Generator[DirectoryResult, None, None]:
        """
        Sequential depth-first traversal: each directory is yielded before its
        subdirectories, which follow in enumeration order.
        """
        stack: Pending = [(path, depth)]
        while stack:
            if self.cancelled:
                return
            path, depth = stack.pop()
            result = self.scan(path, depth)
            yield result
            if self.request.recurse:
                stack.extend(
                    (subdirectory, depth + 1)
                    for subdirectory in reversed(result.subdirectories)
                )

    def _task(self, path: str, depth: int, aggregator: ResultAggregator) -> Pending:
        """Scan one directory within the worker pool. Returns the
        subdirectories to dispatch as new tasks. Below the parallel depth the
        subtree is walked right here instead."""
        if self.cancelled:
            return []
        result = self.scan(path, depth)
        aggregator.add(result)
        if not self.request.recurse:
            return []
        pending = [(subdirectory, depth + 1) for subdirectory in result.subdirectories]
        if self.request.is_parallel_at(depth):
            return pending
        for subdirectory, subdepth in pending:
            for sub_result in self.walk(subdirectory, subdepth):
                aggregator.add(sub_result)
        return []

    def _run_parallel(self, aggregator: ResultAggregator) -> None:
        with ThreadPoolExecutor(
            max_workers=self.request.max_workers, thread_name_prefix="filespyder"
        ) as pool:
            running: set[Future] = {
                pool.submit(self._task, self.request.root_path, 0, aggregator)
            }
            try:
                while running:
                    done, running = wait(running, return_when=FIRST_COMPLETED)
                    for future in done:
                        for path, depth in future.result():
                            running.add(pool.submit(self._task, path, depth, aggregator))
            except BaseException:
                for future in running:
                    future.cancel()
                raise

    def run(self) -> SearchOutcome:
        """
        Execute the search.

        Returns:
            The merged outcome of all visited directories

        Raises:
            EnumerationError: For unanticipated failures in strict mode
            SearchCancelled: If the cancel event was set
        """
        request = self.request
        aggregator = ResultAggregator()
        with Took() as t:
            if request.is_parallel_at(0):
                self._run_parallel(aggregator)
            else:
                for result in self.walk(request.root_path):
                    aggregator.add(result)
        outcome = aggregator.outcome()
        if self.cancelled:
            log.warning(
                f"Search cancelled: `{request.root_path}`",
                matches=outcome.match_count,
                failures=outcome.failure_count,
            )
            raise SearchCancelled(outcome)
        log.info(
            f"Search `{request.pattern}` in `{request.root_path}`: Done.",
            matches=outcome.match_count,
            failures=outcome.failure_count,
            took=str(t.took),
        )
        return outcome


def search(
    request: SearchRequest | Uri,
    pattern: str | None = None,
    *,
    enumerator: Enumerator | None = None,
    cancel: threading.Event | None = None,
    **kwargs: Any,
) -> SearchOutcome:
    """
    Search a directory (tree) for entries matching a wildcard pattern.

    Example:
        ```python
        from filespyder import SearchRequest, search

        outcome = search("./data", "*.csv", recurse=True)
        # or
        outcome = search(SearchRequest(root_path="./data", pattern="*.csv"))
        ```

    Args:
        request: A `SearchRequest` or the root path to search in
        pattern: Wildcard pattern (if `request` is a path), default `*`
        enumerator: Specific enumeration backend
        cancel: Event to cancel the search from another thread
        **kwargs: `SearchRequest` fields (if `request` is a path)

    Returns:
        The matches and the failures of the search
    """
    if not isinstance(request, SearchRequest):
        if pattern is not None:
            kwargs["pattern"] = pattern
        request = SearchRequest(root_path=request, **kwargs)
    return Spyder(request, enumerator=enumerator, cancel=cancel).run()
