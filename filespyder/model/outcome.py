from filespyder.model.base import BaseModel
from filespyder.model.entry import EntryRecord, FailureRecord


class SearchOutcome(BaseModel):
    """
    The result of a search: matched entries and the directories that could
    not be enumerated, kept apart. Order is only meaningful for sequential
    searches (parent before children, depth first, enumeration order).
    """

    matches: list[EntryRecord] = []
    failures: list[FailureRecord] = []
    hidden: list[str] = []
    """Paths of hidden entries (only if requested)"""

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def paths(self) -> list[str]:
        return [m.path for m in self.matches]

    @property
    def failed_paths(self) -> list[str]:
        return [f.path for f in self.failures]

    @property
    def ok(self) -> bool:
        return not self.failures
