"""Digest pipeline composition root."""

from musive.pipeline.digest import DigestPipeline, build_pipeline, run_digest
from musive.pipeline.models import DigestResult, RunOutcome, RunStatus


__all__ = [
    "DigestPipeline",
    "DigestResult",
    "RunOutcome",
    "RunStatus",
    "build_pipeline",
    "run_digest",
]
