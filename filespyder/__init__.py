"""
# filespyder

Fast, resilient recursive file search. Matches entry names against wildcard
patterns, optionally descends into subdirectories concurrently and reports
directories that couldn't be enumerated separately from the matches.
"""

from filespyder.aggregate import ResultAggregator
from filespyder.exceptions import EnumerationError, SearchCancelled, SpyderError
from filespyder.logic.match import match_name
from filespyder.model import (
    EntryRecord,
    FailureReason,
    FailureRecord,
    FileAttributes,
    SearchOutcome,
    SearchRequest,
)
from filespyder.search import Spyder, search

__version__ = "0.1.0"

__all__ = [
    "EntryRecord",
    "EnumerationError",
    "FailureReason",
    "FailureRecord",
    "FileAttributes",
    "ResultAggregator",
    "SearchCancelled",
    "SearchOutcome",
    "SearchRequest",
    "Spyder",
    "SpyderError",
    "match_name",
    "search",
]
