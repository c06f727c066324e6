"""Tests for PipelineMetrics."""

import pytest

from musive.observability.metrics import PipelineMetrics


@pytest.mark.unit
class TestPipelineMetrics:
    """Tests for the metrics singleton."""

    def test_singleton_and_reset(self) -> None:
        """get_instance is shared until reset."""
        first = PipelineMetrics.get_instance()
        assert PipelineMetrics.get_instance() is first

        PipelineMetrics.reset()

        assert PipelineMetrics.get_instance() is not first

    def test_counters(self) -> None:
        """Recorded events show up in to_dict."""
        metrics = PipelineMetrics()
        metrics.record_source(success=True)
        metrics.record_source(success=False)
        metrics.record_classification(accepted=True)
        metrics.record_classification(accepted=False, failed=True)
        metrics.record_dedupe(2)
        metrics.record_dedupe(0, failed=True)
        metrics.record_digest(7)

        assert metrics.to_dict() == {
            "sources_succeeded": 1,
            "sources_failed": 1,
            "candidates_classified": 2,
            "classifications_accepted": 1,
            "classification_failures": 1,
            "dedupe_removed": 2,
            "dedupe_failures": 1,
            "digest_items": 7,
        }
