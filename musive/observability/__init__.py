"""Observability module for logging and metrics."""

from musive.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from musive.observability.metrics import PipelineMetrics


__all__ = [
    "PipelineMetrics",
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
]
