"""Digest output writers."""

from musive.renderer.json_renderer import (
    DIGEST_FILENAME,
    JsonRenderer,
    render_digest_json,
)
from musive.renderer.models import GeneratedFile


__all__ = [
    "DIGEST_FILENAME",
    "GeneratedFile",
    "JsonRenderer",
    "render_digest_json",
]
