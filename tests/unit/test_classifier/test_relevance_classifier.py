"""Tests for RelevanceClassifier and answer parsing."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from musive.classifier.client import RelevanceClassifier, parse_classification
from musive.classifier.errors import ClassificationError
from musive.classifier.models import ClassificationResult
from musive.classifier.prompts import build_classification_prompt, build_system_instruction
from musive.features.llm.errors import LlmApiError
from musive.observability.metrics import PipelineMetrics


def make_client(answer: str | Exception) -> MagicMock:
    """Create an LlmClient mock returning or raising ``answer``."""
    client = MagicMock()
    if isinstance(answer, Exception):
        client.generate_content = AsyncMock(side_effect=answer)
    else:
        client.generate_content = AsyncMock(return_value=answer)
    return client


@pytest.mark.unit
class TestParseClassification:
    """Tests for parse_classification."""

    def test_valid_answer(self) -> None:
        """A well-formed acceptance is parsed."""
        result = parse_classification(
            '{"isValid": true, "summary": " New album in May. ", "interestLevel": 72}'
        )
        assert result == ClassificationResult(
            is_valid=True, summary="New album in May.", interest_level=72
        )

    def test_rejection_discards_payload(self) -> None:
        """isValid false ignores any summary or interest level."""
        result = parse_classification(
            '{"isValid": false, "summary": "ignored", "interestLevel": 99}'
        )
        assert result.is_valid is False
        assert result.summary == ""
        assert result.interest_level == 0

    @pytest.mark.parametrize(
        ("raw_level", "expected"),
        [(150, 100), (-5, 1), (0.4, 1), (72.6, 73), (None, 0)],
    )
    def test_interest_level_normalization(
        self, raw_level: float | None, expected: int
    ) -> None:
        """Interest is rounded and clamped to 1-100; absent means 0."""
        payload: dict[str, object] = {"isValid": True, "summary": "s"}
        if raw_level is not None:
            payload["interestLevel"] = raw_level
        assert parse_classification(json.dumps(payload)).interest_level == expected

    def test_fenced_answer(self) -> None:
        """Markdown fences around the object are tolerated."""
        raw = '```json\n{"isValid": true, "summary": "ok", "interestLevel": 10}\n```'
        assert parse_classification(raw).is_valid is True

    @pytest.mark.parametrize(
        "raw",
        [
            "not json at all",
            '{"summary": "no verdict"}',
            '{"isValid": "yes"}',
            '{"isValid": true, "summary": 42}',
            '{"isValid": true, "interestLevel": "high"}',
            '{"isValid": true, "interestLevel": true}',
            "[1, 2, 3]",
        ],
    )
    def test_malformed_answers_raise(self, raw: str) -> None:
        """Answers with missing or mistyped fields are errors."""
        with pytest.raises(ClassificationError):
            parse_classification(raw)

    def test_object_wrapped_in_prose_raises(self) -> None:
        """An acceptance with text around it is not valid JSON."""
        raw = (
            'Sure! Here it is: {"isValid": true, "summary": "s", '
            '"interestLevel": 70} hope that helps'
        )
        with pytest.raises(ClassificationError, match="not valid JSON"):
            parse_classification(raw)

    def test_invalid_escape_raises(self) -> None:
        """Invalid escape sequences are not repaired."""
        with pytest.raises(ClassificationError):
            parse_classification(r'{"isValid": true, "summary": "a\_b"}')


@pytest.mark.unit
class TestRelevanceClassifier:
    """Tests for RelevanceClassifier.classify."""

    def test_accepts_candidate(self) -> None:
        """A valid answer is returned and counted."""
        metrics = PipelineMetrics()
        client = make_client('{"isValid": true, "summary": "Tour", "interestLevel": 60}')
        classifier = RelevanceClassifier(client, metrics=metrics)

        result = asyncio.run(classifier.classify("Tour Announced", "Dates below"))

        assert result.is_valid is True
        assert result.interest_level == 60
        assert metrics.candidates_classified == 1
        assert metrics.classifications_accepted == 1

    def test_sends_prompt_and_system_instruction(self) -> None:
        """The judge receives the title/excerpt prompt and curator rules."""
        client = make_client('{"isValid": false}')
        classifier = RelevanceClassifier(client, summary_language="English")

        asyncio.run(classifier.classify("Title", "Excerpt"))

        kwargs = client.generate_content.call_args.kwargs
        assert kwargs["prompt"] == build_classification_prompt("Title", "Excerpt")
        assert kwargs["system_instruction"] == build_system_instruction("English")

    def test_judge_error_maps_to_rejection(self) -> None:
        """A transport failure yields a rejection, never an exception."""
        metrics = PipelineMetrics()
        classifier = RelevanceClassifier(
            make_client(LlmApiError("boom", status_code=500)), metrics=metrics
        )

        result = asyncio.run(classifier.classify("Title", "Excerpt"))

        assert result == ClassificationResult.rejected()
        assert metrics.classification_failures == 1
        assert metrics.classifications_accepted == 0

    def test_malformed_answer_maps_to_rejection(self) -> None:
        """Unparseable output yields a rejection."""
        classifier = RelevanceClassifier(
            make_client("I think this is relevant!"), metrics=PipelineMetrics()
        )

        result = asyncio.run(classifier.classify("Title", "Excerpt"))

        assert result.is_valid is False

    def test_concurrency_cap(self) -> None:
        """No more than max_concurrent_requests calls are in flight."""
        in_flight = 0
        peak = 0

        async def generate_content(
            prompt: str, system_instruction: str | None = None
        ) -> str:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return '{"isValid": false}'

        client = MagicMock()
        client.generate_content = generate_content

        async def run_all() -> None:
            classifier = RelevanceClassifier(
                client, max_concurrent_requests=2, metrics=PipelineMetrics()
            )
            await asyncio.gather(*(classifier.classify(f"T{i}", "") for i in range(6)))

        asyncio.run(run_all())

        assert peak == 2


@pytest.mark.unit
class TestPrompts:
    """Tests for classifier prompts."""

    def test_system_instruction_names_language_and_format(self) -> None:
        """The instruction asks for the summary language and JSON keys."""
        instruction = build_system_instruction("Korean")
        assert "Korean" in instruction
        assert "isValid" in instruction
        assert "interestLevel" in instruction

    def test_classification_prompt(self) -> None:
        """The user prompt carries title and excerpt."""
        prompt = build_classification_prompt("Big News", "Details here")
        assert prompt == "Title: Big News\nContent: Details here"
