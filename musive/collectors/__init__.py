"""Feed collection: extraction, per-source collection, and fan-out."""

from musive.collectors.errors import (
    CollectorErrorClass,
    ErrorRecord,
    SourceUnavailableError,
)
from musive.collectors.extractor import (
    Candidate,
    extract_candidate,
    select_recent_candidates,
)
from musive.collectors.feed import CollectorResult, FeedCollector
from musive.collectors.runner import CollectorRunner, RunnerResult


__all__ = [
    "Candidate",
    "CollectorErrorClass",
    "CollectorResult",
    "CollectorRunner",
    "ErrorRecord",
    "FeedCollector",
    "RunnerResult",
    "SourceUnavailableError",
    "extract_candidate",
    "select_recent_candidates",
]
