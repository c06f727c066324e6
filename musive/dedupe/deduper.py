"""Duplicate-event removal delegated to a content-judgment service."""

from dataclasses import dataclass, field

import structlog

from musive.data_model.news import NewsItem
from musive.dedupe.errors import DeduplicationError
from musive.dedupe.prompts import SYSTEM_INSTRUCTION, build_dedupe_prompt
from musive.features.llm.errors import LlmProcessingError
from musive.features.llm.json_utils import parse_json_object
from musive.features.llm.protocols import LlmClient
from musive.observability.metrics import PipelineMetrics


logger = structlog.get_logger()

_INDICES_KEY = "indicesToRemove"


@dataclass
class DedupeResult:
    """Outcome of one dedupe pass.

    Attributes:
        items: Surviving items, in their original relative order.
        removed_indices: Input positions that were removed.
        judged: Whether the judge answered usably (False means pass-through).
        error: Why the pass degraded to a no-op, if it did.
    """

    items: list[NewsItem]
    removed_indices: list[int] = field(default_factory=list)
    judged: bool = True
    error: str | None = None

    @property
    def removed_count(self) -> int:
        """Number of items removed."""
        return len(self.removed_indices)


def parse_indices_to_remove(raw: str) -> set[int]:
    """Interpret a dedupe judge answer.

    Non-integer entries (including booleans) are dropped here; range
    checking happens against the request list.

    Args:
        raw: Raw model output.

    Returns:
        Set of indices the judge asked to remove.

    Raises:
        DeduplicationError: If the answer is not a JSON object or lacks
            an ``indicesToRemove`` list.
    """
    try:
        data = parse_json_object(raw)
    except LlmProcessingError as exc:
        raise DeduplicationError(str(exc)) from exc

    indices = data.get(_INDICES_KEY)
    if not isinstance(indices, list):
        msg = f"{_INDICES_KEY} missing or not a list"
        raise DeduplicationError(msg)

    return {
        value
        for value in indices
        if isinstance(value, int) and not isinstance(value, bool)
    }


class NewsDeduplicator:
    """Removes items that cover the same event as another item.

    The only cross-item decision in the pipeline. The judge sees the full
    list and picks which duplicate survives; this class only filters by
    the returned indices. Any failure leaves the input untouched.
    """

    def __init__(
        self,
        client: LlmClient,
        metrics: PipelineMetrics | None = None,
    ) -> None:
        """Initialize the deduplicator.

        Args:
            client: Content-judgment service.
            metrics: Optional metrics instance.
        """
        self._client = client
        self._metrics = metrics or PipelineMetrics.get_instance()
        self._log = logger.bind(component="dedupe")

    async def dedupe(self, items: list[NewsItem]) -> DedupeResult:
        """Remove duplicate coverage from the aggregated items.

        Args:
            items: All collected items, in aggregation order.

        Returns:
            DedupeResult; ``items`` equals the input when the judge fails.
        """
        if len(items) < 2:
            return DedupeResult(items=list(items))

        try:
            raw = await self._client.generate_content(
                prompt=build_dedupe_prompt(items),
                system_instruction=SYSTEM_INSTRUCTION,
            )
            indices = parse_indices_to_remove(raw)
        except Exception as exc:  # noqa: BLE001
            self._log.warning(
                "dedupe_failed",
                items_in=len(items),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            self._metrics.record_dedupe(0, failed=True)
            return DedupeResult(items=list(items), judged=False, error=str(exc))

        removed = sorted(i for i in indices if 0 <= i < len(items))
        ignored = len(indices) - len(removed)
        removed_set = set(removed)
        survivors = [item for i, item in enumerate(items) if i not in removed_set]

        self._metrics.record_dedupe(len(removed))
        self._log.info(
            "dedupe_complete",
            items_in=len(items),
            items_out=len(survivors),
            removed=removed,
            ignored_indices=ignored,
        )

        return DedupeResult(items=survivors, removed_indices=removed)
