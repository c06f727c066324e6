"""Aggregator: runs every source's collector concurrently."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from musive.collectors.errors import CollectorErrorClass, ErrorRecord
from musive.collectors.feed import CollectorResult, FeedCollector
from musive.config.schemas.sources import SourceConfig
from musive.data_model.news import NewsItem
from musive.observability.metrics import PipelineMetrics


logger = structlog.get_logger()


@dataclass
class RunnerResult:
    """Result of collecting all sources.

    Attributes:
        started_at: When collection started.
        finished_at: When the last source finished.
        source_results: Per-source results, in registry order.
        items: Concatenated items, in registry order.
    """

    started_at: datetime
    finished_at: datetime
    source_results: list[CollectorResult] = field(default_factory=list)
    items: list[NewsItem] = field(default_factory=list)

    @property
    def sources_succeeded(self) -> int:
        """Number of sources fetched and parsed."""
        return sum(1 for r in self.source_results if r.success)

    @property
    def sources_failed(self) -> int:
        """Number of sources that contributed nothing because of a failure."""
        return sum(1 for r in self.source_results if not r.success)

    @property
    def candidates_total(self) -> int:
        """Number of candidates classified across all sources."""
        return sum(r.candidates for r in self.source_results)

    @property
    def duration_ms(self) -> float:
        """Get total duration in milliseconds."""
        return (self.finished_at - self.started_at).total_seconds() * 1000


class CollectorRunner:
    """Fans out collection across sources and concatenates the results.

    Every source runs as its own task; the runner waits for all of them.
    An exception escaping a collector is recorded as a failed source and
    never cancels its siblings.
    """

    def __init__(
        self,
        collector: FeedCollector,
        metrics: PipelineMetrics | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            collector: Per-source collector.
            metrics: Optional metrics instance.
        """
        self._collector = collector
        self._metrics = metrics or PipelineMetrics.get_instance()
        self._log = logger.bind(component="runner")

    async def run(
        self,
        sources: list[SourceConfig],
        now: datetime | None = None,
    ) -> RunnerResult:
        """Collect all enabled sources concurrently.

        Args:
            sources: Registered sources.
            now: Run time (defaults to now).

        Returns:
            RunnerResult with per-source results and concatenated items.
        """
        now = now or datetime.now(UTC)
        started_at = datetime.now(UTC)
        active_sources = [s for s in sources if s.enabled]

        self._log.info(
            "runner_started",
            source_count=len(sources),
            active_count=len(active_sources),
        )

        outcomes = await asyncio.gather(
            *(self._collector.collect(source, now) for source in active_sources),
            return_exceptions=True,
        )

        source_results: list[CollectorResult] = []
        for source, outcome in zip(active_sources, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                self._log.error(
                    "source_execution_error",
                    source_id=source.id,
                    error=str(outcome),
                )
                outcome = CollectorResult(
                    source_id=source.id,
                    error=ErrorRecord(
                        error_class=CollectorErrorClass.UNEXPECTED,
                        message=f"Execution error: {outcome!r}",
                        source_id=source.id,
                    ),
                )
            self._metrics.record_source(success=outcome.success)
            source_results.append(outcome)

        items = [item for result in source_results for item in result.items]
        finished_at = datetime.now(UTC)

        result = RunnerResult(
            started_at=started_at,
            finished_at=finished_at,
            source_results=source_results,
            items=items,
        )

        self._log.info(
            "runner_complete",
            duration_ms=round(result.duration_ms, 2),
            total_items=len(items),
            sources_succeeded=result.sources_succeeded,
            sources_failed=result.sources_failed,
        )

        return result
