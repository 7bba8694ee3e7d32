from filespyder.model.base import BaseModel
from filespyder.model.entry import (
    EntryRecord,
    FailureReason,
    FailureRecord,
    FileAttributes,
)
from filespyder.model.outcome import SearchOutcome
from filespyder.model.request import SearchRequest

__all__ = [
    "BaseModel",
    "EntryRecord",
    "FailureReason",
    "FailureRecord",
    "FileAttributes",
    "SearchOutcome",
    "SearchRequest",
]
