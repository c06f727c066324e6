"""Metrics collection for digest runs."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class PipelineMetrics:
    """Counters for one process, dumped at the end of each run.

    Attributes:
        sources_succeeded: Sources whose feed was fetched and parsed.
        sources_failed: Sources that contributed nothing because of a failure.
        candidates_classified: Classifier calls issued.
        classifications_accepted: Candidates judged valid.
        classification_failures: Classifier calls that errored or returned junk.
        dedupe_removed: Items removed as duplicates.
        dedupe_failures: Dedupe judge calls that degraded to a no-op.
        digest_items: Items in the last digest.
    """

    sources_succeeded: int = 0
    sources_failed: int = 0
    candidates_classified: int = 0
    classifications_accepted: int = 0
    classification_failures: int = 0
    dedupe_removed: int = 0
    dedupe_failures: int = 0
    digest_items: int = 0

    _instance: ClassVar["PipelineMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "PipelineMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_source(self, *, success: bool) -> None:
        """Record the outcome of one source."""
        if success:
            self.sources_succeeded += 1
        else:
            self.sources_failed += 1

    def record_classification(self, *, accepted: bool, failed: bool = False) -> None:
        """Record one classifier call.

        Args:
            accepted: Whether the candidate was judged valid.
            failed: Whether the call errored (counted as a rejection).
        """
        self.candidates_classified += 1
        if accepted:
            self.classifications_accepted += 1
        if failed:
            self.classification_failures += 1

    def record_dedupe(self, removed: int, *, failed: bool = False) -> None:
        """Record one dedupe pass."""
        self.dedupe_removed += removed
        if failed:
            self.dedupe_failures += 1

    def record_digest(self, size: int) -> None:
        """Record the size of the produced digest."""
        self.digest_items = size

    def to_dict(self) -> dict[str, int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "sources_succeeded": self.sources_succeeded,
            "sources_failed": self.sources_failed,
            "candidates_classified": self.candidates_classified,
            "classifications_accepted": self.classifications_accepted,
            "classification_failures": self.classification_failures,
            "dedupe_removed": self.dedupe_removed,
            "dedupe_failures": self.dedupe_failures,
            "digest_items": self.digest_items,
        }
