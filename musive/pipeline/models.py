"""Data models for digest runs."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import Field

from musive.collectors.errors import ErrorRecord
from musive.data_model.base import StrictBaseModel
from musive.data_model.news import NewsItem


class RunStatus(str, Enum):
    """Outcome of a digest run.

    - READY: a non-empty digest was produced
    - EMPTY: the run completed but nothing survived; skip delivery
    - FAILED: an unexpected error escaped the pipeline
    """

    READY = "delivered_ready"
    EMPTY = "empty"
    FAILED = "failed"


class DigestResult(StrictBaseModel):
    """The pipeline's output: ranked items plus run statistics.

    Attributes:
        run_id: Run identifier.
        generated_at: Run time used for the recency window.
        items: Ranked digest items (at most the digest size).
        sources_total: Sources collected.
        sources_failed: Sources that contributed nothing because of a failure.
        source_errors: Failure records of the failed sources.
        candidates_classified: Candidates sent to the classifier.
        items_collected: Accepted items before dedupe.
        duplicates_removed: Items removed by dedupe.
        dedupe_applied: Whether the dedupe judge answered usably.
        output_checksum: SHA-256 of the ordered items.
    """

    run_id: str
    generated_at: datetime
    items: list[NewsItem] = Field(default_factory=list)
    sources_total: Annotated[int, Field(ge=0)] = 0
    sources_failed: Annotated[int, Field(ge=0)] = 0
    source_errors: list[ErrorRecord] = Field(default_factory=list)
    candidates_classified: Annotated[int, Field(ge=0)] = 0
    items_collected: Annotated[int, Field(ge=0)] = 0
    duplicates_removed: Annotated[int, Field(ge=0)] = 0
    dedupe_applied: bool = True
    output_checksum: str = ""

    @property
    def is_empty(self) -> bool:
        """Nothing to deliver."""
        return not self.items

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize the digest for consumers."""
        return {
            "run_id": self.run_id,
            "generated_at": self.generated_at.isoformat(),
            "count": len(self.items),
            "items": [item.to_json_dict() for item in self.items],
            "stats": {
                "sources_total": self.sources_total,
                "sources_failed": self.sources_failed,
                "candidates_classified": self.candidates_classified,
                "items_collected": self.items_collected,
                "duplicates_removed": self.duplicates_removed,
                "dedupe_applied": self.dedupe_applied,
            },
            "output_checksum": self.output_checksum,
        }


class RunOutcome(StrictBaseModel):
    """What the trigger surface receives from ``run_digest``.

    Attributes:
        run_id: Run identifier.
        status: READY, EMPTY, or FAILED.
        digest: The digest, unless the run failed.
        error: Error description when the run failed.
    """

    run_id: str
    status: RunStatus
    digest: DigestResult | None = None
    error: str | None = None

    @property
    def should_deliver(self) -> bool:
        """Whether the caller has something to send."""
        return self.status == RunStatus.READY
