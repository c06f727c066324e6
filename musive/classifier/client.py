"""Relevance classifier client backed by a content-judgment service."""

from __future__ import annotations

import asyncio
import contextlib
import math
from collections.abc import AsyncIterator

import structlog

from musive.classifier.errors import ClassificationError
from musive.classifier.models import ClassificationResult
from musive.classifier.prompts import (
    build_classification_prompt,
    build_system_instruction,
)
from musive.features.llm.errors import LlmProcessingError
from musive.features.llm.json_utils import parse_json_object
from musive.features.llm.protocols import LlmClient
from musive.observability.metrics import PipelineMetrics


logger = structlog.get_logger()

_MIN_INTEREST = 1
_MAX_INTEREST = 100


class RelevanceClassifier:
    """Judges whether a candidate belongs in the digest.

    ``classify`` never raises: transport errors, unparseable answers and
    malformed fields all map to ``ClassificationResult.rejected()``.
    There is no retry; a failed judgment drops that one candidate.
    """

    def __init__(
        self,
        client: LlmClient,
        summary_language: str = "Korean",
        max_concurrent_requests: int = 8,
        metrics: PipelineMetrics | None = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            client: Content-judgment service.
            summary_language: Language of the generated summaries.
            max_concurrent_requests: Cap on in-flight judge calls across
                all sources (0 disables the cap).
            metrics: Optional metrics instance.
        """
        self._client = client
        self._system_instruction = build_system_instruction(summary_language)
        self._semaphore = (
            asyncio.Semaphore(max_concurrent_requests)
            if max_concurrent_requests > 0
            else None
        )
        self._metrics = metrics or PipelineMetrics.get_instance()
        self._log = logger.bind(component="classifier")

    @contextlib.asynccontextmanager
    async def _slot(self) -> AsyncIterator[None]:
        if self._semaphore is None:
            yield
            return
        async with self._semaphore:
            yield

    async def classify(self, title: str, excerpt: str) -> ClassificationResult:
        """Classify one candidate.

        Args:
            title: Candidate title.
            excerpt: Plain-text excerpt (already length-capped).

        Returns:
            The judge's verdict, or a rejection if anything went wrong.
        """
        prompt = build_classification_prompt(title, excerpt)

        try:
            async with self._slot():
                raw = await self._client.generate_content(
                    prompt=prompt,
                    system_instruction=self._system_instruction,
                )
            result = parse_classification(raw)
        except Exception as exc:  # noqa: BLE001
            self._log.warning(
                "classification_failed",
                title=title[:120],
                error_type=type(exc).__name__,
                error=str(exc),
            )
            self._metrics.record_classification(accepted=False, failed=True)
            return ClassificationResult.rejected()

        self._metrics.record_classification(accepted=result.is_valid)
        self._log.debug(
            "classification_complete",
            title=title[:120],
            is_valid=result.is_valid,
            interest_level=result.interest_level,
        )
        return result


def parse_classification(raw: str) -> ClassificationResult:
    """Interpret a judge answer.

    Args:
        raw: Raw model output.

    Returns:
        Parsed verdict. A rejection ignores any summary or interest level
        present in the answer; a missing interest level becomes 0.

    Raises:
        ClassificationError: If the answer is not a JSON object or its
            fields have the wrong types.
    """
    try:
        data = parse_json_object(raw)
    except LlmProcessingError as exc:
        raise ClassificationError(str(exc)) from exc

    is_valid = data.get("isValid")
    if not isinstance(is_valid, bool):
        msg = f"isValid must be a boolean, got {type(is_valid).__name__}"
        raise ClassificationError(msg)

    if not is_valid:
        return ClassificationResult.rejected()

    summary = data.get("summary") or ""
    if not isinstance(summary, str):
        msg = f"summary must be a string, got {type(summary).__name__}"
        raise ClassificationError(msg)

    return ClassificationResult(
        is_valid=True,
        summary=summary.strip(),
        interest_level=_normalize_interest(data.get("interestLevel")),
    )


def _normalize_interest(value: object) -> int:
    """Round and clamp an interest level to 1-100; absent means 0.

    Raises:
        ClassificationError: If the value is present but not a number.
    """
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"interestLevel must be a number, got {type(value).__name__}"
        raise ClassificationError(msg)
    if not math.isfinite(value):
        msg = "interestLevel must be finite"
        raise ClassificationError(msg)
    return max(_MIN_INTEREST, min(_MAX_INTEREST, round(value)))
