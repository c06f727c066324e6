"""Digest pipeline: collect, dedupe, rank."""

import uuid
from datetime import UTC, datetime

import structlog

from musive.classifier.client import RelevanceClassifier
from musive.collectors.feed import FeedCollector
from musive.collectors.runner import CollectorRunner
from musive.config.registry import default_sources_config
from musive.config.schemas.sources import SourceConfig
from musive.dedupe.deduper import NewsDeduplicator
from musive.features.llm.factory import create_llm_client
from musive.features.llm.protocols import LlmClient
from musive.fetch.client import FeedFetcher
from musive.observability.logging import bind_run_context, clear_run_context
from musive.observability.metrics import PipelineMetrics
from musive.pipeline.models import DigestResult, RunOutcome, RunStatus
from musive.ranker.ranker import NewsRanker, compute_checksum
from musive.settings.app import AppSettings, PipelineConfig


logger = structlog.get_logger()


class DigestPipeline:
    """Composes the aggregator, deduplicator and ranker into one run.

    Holds no state between runs; every call to ``run`` starts from the
    source list and the injected collaborators.
    """

    def __init__(
        self,
        sources: list[SourceConfig],
        runner: CollectorRunner,
        deduplicator: NewsDeduplicator,
        ranker: NewsRanker,
        metrics: PipelineMetrics | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            sources: Registered sources, in registry order.
            runner: Aggregator over all sources.
            deduplicator: Cross-item duplicate remover.
            ranker: Orders and truncates the survivors.
            metrics: Optional metrics instance.
        """
        self._sources = sources
        self._runner = runner
        self._deduplicator = deduplicator
        self._ranker = ranker
        self._metrics = metrics or PipelineMetrics.get_instance()
        self._log = logger.bind(component="pipeline")

    async def run(
        self,
        now: datetime | None = None,
        run_id: str | None = None,
    ) -> DigestResult:
        """Produce one digest.

        Args:
            now: Run time for the recency window (defaults to now).
            run_id: Run identifier (generated when omitted).

        Returns:
            DigestResult; empty when nothing qualified.
        """
        now = now or datetime.now(UTC)
        run_id = run_id or str(uuid.uuid4())

        collected = await self._runner.run(self._sources, now)
        deduped = await self._deduplicator.dedupe(collected.items)
        ranked = self._ranker.rank(deduped.items)
        self._metrics.record_digest(len(ranked))

        return DigestResult(
            run_id=run_id,
            generated_at=now,
            items=ranked,
            sources_total=len(collected.source_results),
            sources_failed=collected.sources_failed,
            source_errors=[
                r.error for r in collected.source_results if r.error is not None
            ],
            candidates_classified=collected.candidates_total,
            items_collected=len(collected.items),
            duplicates_removed=deduped.removed_count,
            dedupe_applied=deduped.judged,
            output_checksum=compute_checksum(ranked),
        )


def build_pipeline(
    sources: list[SourceConfig],
    fetcher: FeedFetcher,
    llm_client: LlmClient,
    config: PipelineConfig,
    summary_language: str = "Korean",
    metrics: PipelineMetrics | None = None,
) -> DigestPipeline:
    """Wire a DigestPipeline from its transports and configuration.

    Args:
        sources: Registered sources.
        fetcher: Feed transport.
        llm_client: Content-judgment service shared by classifier and dedupe.
        config: Immutable run configuration.
        summary_language: Language of the generated summaries.
        metrics: Optional metrics instance.

    Returns:
        A ready-to-run DigestPipeline.
    """
    metrics = metrics or PipelineMetrics.get_instance()
    classifier = RelevanceClassifier(
        llm_client,
        summary_language=summary_language,
        max_concurrent_requests=config.max_concurrent_requests,
        metrics=metrics,
    )
    collector = FeedCollector(fetcher, classifier, config)
    return DigestPipeline(
        sources=sources,
        runner=CollectorRunner(collector, metrics=metrics),
        deduplicator=NewsDeduplicator(llm_client, metrics=metrics),
        ranker=NewsRanker(config.digest_size),
        metrics=metrics,
    )


async def run_digest(  # noqa: PLR0913
    settings: AppSettings,
    sources: list[SourceConfig] | None = None,
    *,
    now: datetime | None = None,
    run_id: str | None = None,
    trigger: str | None = None,
    llm_client: LlmClient | None = None,
    fetcher: FeedFetcher | None = None,
) -> RunOutcome:
    """Run one digest end to end and report its outcome.

    Nothing escapes: an unexpected error is logged with its traceback and
    reported as a failed outcome. Transports created here are closed
    before returning; injected ones are left to the caller. Metrics
    counters start from zero on every run.

    Args:
        settings: Application settings.
        sources: Registered sources (defaults to the built-in registry).
        now: Run time for the recency window (defaults to now).
        run_id: Run identifier (generated when omitted).
        trigger: What started the run, for log context.
        llm_client: Optional judge (created from settings when omitted).
        fetcher: Optional feed transport (created from settings when omitted).

    Returns:
        RunOutcome with status READY, EMPTY, or FAILED.
    """
    run_id = run_id or str(uuid.uuid4())
    PipelineMetrics.reset()
    metrics = PipelineMetrics.get_instance()

    bind_run_context(run_id, trigger)
    log = logger.bind(component="pipeline")

    owned: list[FeedFetcher | LlmClient] = []
    try:
        config = settings.pipeline_config()
        if sources is None:
            sources = default_sources_config().enabled_sources
        log.info(
            "digest_run_started",
            source_count=len(sources),
            digest_size=config.digest_size,
            lookback_hours=config.lookback_hours,
            llm_provider=settings.llm_provider,
        )

        if fetcher is None:
            fetcher = FeedFetcher(
                timeout_seconds=config.fetch_timeout_seconds,
                user_agent=config.user_agent,
            )
            owned.append(fetcher)
        if llm_client is None:
            llm_client = create_llm_client(settings)
            owned.append(llm_client)

        pipeline = build_pipeline(
            sources,
            fetcher,
            llm_client,
            config,
            summary_language=settings.summary_language,
            metrics=metrics,
        )
        digest = await pipeline.run(now=now, run_id=run_id)
    except Exception as e:  # noqa: BLE001
        log.error("digest_run_failed", error=str(e), exc_info=True)
        outcome = RunOutcome(run_id=run_id, status=RunStatus.FAILED, error=str(e))
    else:
        if digest.is_empty:
            log.info(
                "digest_empty",
                sources_failed=digest.sources_failed,
                candidates_classified=digest.candidates_classified,
            )
            outcome = RunOutcome(run_id=run_id, status=RunStatus.EMPTY, digest=digest)
        else:
            outcome = RunOutcome(run_id=run_id, status=RunStatus.READY, digest=digest)

    try:
        for resource in owned:
            await _close_quietly(resource)
        log.info(
            "digest_run_complete",
            status=outcome.status.value,
            items=len(outcome.digest.items) if outcome.digest else 0,
            metrics=metrics.to_dict(),
        )
    finally:
        clear_run_context()
    return outcome


async def _close_quietly(resource: FeedFetcher | LlmClient) -> None:
    try:
        await resource.aclose()
    except Exception as e:  # noqa: BLE001
        logger.warning(
            "resource_close_failed",
            component="pipeline",
            resource=type(resource).__name__,
            error=str(e),
        )
