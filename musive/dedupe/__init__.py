"""Cross-source duplicate removal."""

from musive.dedupe.deduper import (
    DedupeResult,
    NewsDeduplicator,
    parse_indices_to_remove,
)
from musive.dedupe.errors import DeduplicationError


__all__ = [
    "DedupeResult",
    "DeduplicationError",
    "NewsDeduplicator",
    "parse_indices_to_remove",
]
