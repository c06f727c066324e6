"""Per-source collector: fetch, extract, classify."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

import feedparser  # type: ignore[import-untyped]
import structlog

from musive.collectors.errors import (
    CollectorErrorClass,
    ErrorRecord,
    SourceUnavailableError,
)
from musive.collectors.extractor import Candidate, select_recent_candidates
from musive.config.schemas.sources import SourceConfig
from musive.data_model.news import NewsItem
from musive.settings.app import PipelineConfig


if TYPE_CHECKING:
    from musive.classifier.client import RelevanceClassifier
    from musive.fetch.client import FeedFetcher


logger = structlog.get_logger()


@dataclass(frozen=True)
class CollectorResult:
    """Result of collecting one source.

    Attributes:
        source_id: Source identifier.
        items: Accepted items, in candidate order (newest first).
        candidates: Number of candidates sent to the classifier.
        error: Failure record when the source was unavailable.
        duration_ms: Wall-clock time spent on the source.
    """

    source_id: str
    items: list[NewsItem] = field(default_factory=list)
    candidates: int = 0
    error: ErrorRecord | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        """Check if the source was fetched and parsed."""
        return self.error is None


def parse_feed(body: bytes, source_id: str) -> list[Any]:
    """Parse a feed body into feedparser entries.

    A feed with parse warnings is still used when it yielded entries.

    Raises:
        SourceUnavailableError: If the body is not a feed at all.
    """
    feed = feedparser.parse(body)
    if feed.bozo and not feed.entries:
        raise SourceUnavailableError(
            CollectorErrorClass.PARSE,
            f"Unparseable feed: {feed.get('bozo_exception')}",
            source_id=source_id,
        )
    return list(feed.entries)


class FeedCollector:
    """Collects one source's accepted NewsItems.

    A source-level failure (fetch or parse) is logged and yields an
    empty result. Candidates are classified concurrently; the classifier
    itself absorbs per-item failures.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        classifier: RelevanceClassifier,
        config: PipelineConfig | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            fetcher: Feed transport.
            classifier: Relevance classifier.
            config: Run configuration (recency window, caps).
        """
        self._fetcher = fetcher
        self._classifier = classifier
        self._config = config or PipelineConfig()

    async def collect(self, source: SourceConfig, now: datetime) -> CollectorResult:
        """Collect accepted items from one source.

        Args:
            source: Source to collect.
            now: Run time for the recency window.

        Returns:
            CollectorResult; never raises for fetch or parse failures.
        """
        start_ns = time.perf_counter_ns()
        log = logger.bind(component="collector", source_id=source.id)
        log.debug("source_started", url=str(source.url))

        try:
            body = await self._fetcher.fetch(source)
            entries = parse_feed(body, source.id)
        except SourceUnavailableError as e:
            duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
            log.warning(
                "source_failed",
                error_class=e.error_class.value,
                error=e.message,
                duration_ms=round(duration_ms, 2),
            )
            return CollectorResult(
                source_id=source.id,
                error=ErrorRecord.from_exception(e),
                duration_ms=duration_ms,
            )

        candidates = select_recent_candidates(
            entries,
            now,
            lookback_hours=self._config.lookback_hours,
            max_items=self._config.max_items_per_source,
            excerpt_max_chars=self._config.excerpt_max_chars,
        )

        log.info(
            "candidates_selected",
            entries=len(entries),
            candidates=len(candidates),
        )

        results = await asyncio.gather(
            *(self._classify_candidate(source, candidate) for candidate in candidates)
        )
        items = [item for item in results if item is not None]

        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        log.info(
            "source_complete",
            candidates=len(candidates),
            items_accepted=len(items),
            duration_ms=round(duration_ms, 2),
        )

        return CollectorResult(
            source_id=source.id,
            items=items,
            candidates=len(candidates),
            duration_ms=duration_ms,
        )

    async def _classify_candidate(
        self, source: SourceConfig, candidate: Candidate
    ) -> NewsItem | None:
        try:
            verdict = await self._classifier.classify(
                candidate.title, candidate.excerpt
            )
        except Exception as e:  # noqa: BLE001
            logger.warning(
                "classification_failed",
                component="collector",
                source_id=source.id,
                title=candidate.title[:120],
                error=str(e),
            )
            return None

        if not verdict.is_valid:
            return None
        return NewsItem(
            source=source.name,
            title=candidate.title,
            link=candidate.link,
            summary=verdict.summary,
            thumbnail=candidate.thumbnail,
            published_at=candidate.published_at,
            interest_level=verdict.interest_level,
        )
