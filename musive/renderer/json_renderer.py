"""JSON renderer for digest.json output."""

import hashlib
import json
from pathlib import Path

import structlog

from musive.pipeline.models import DigestResult
from musive.renderer.models import GeneratedFile


logger = structlog.get_logger()

DIGEST_FILENAME = "digest.json"


def render_digest_json(digest: DigestResult) -> str:
    """Serialize a digest with stable formatting.

    Args:
        digest: Digest to serialize.

    Returns:
        Indented JSON text with sorted keys and a trailing newline.
    """
    return (
        json.dumps(
            digest.to_json_dict(),
            sort_keys=True,
            indent=2,
            ensure_ascii=False,
        )
        + "\n"
    )


class JsonRenderer:
    """Writes a digest to ``<output_dir>/digest.json``.

    The file is staged as ``digest.json.tmp`` and renamed over the target,
    so a reader never observes a half-written digest.
    """

    def __init__(self, output_dir: Path, run_id: str | None = None) -> None:
        """Initialize the renderer.

        Args:
            output_dir: Output directory (created if missing).
            run_id: Optional run ID for logging context.
        """
        self._output_dir = output_dir
        self._log = logger.bind(component="renderer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def render(self, digest: DigestResult) -> GeneratedFile:
        """Write the digest file.

        Args:
            digest: Digest to write.

        Returns:
            GeneratedFile with path and checksum of digest.json.
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)
        target = self._output_dir / DIGEST_FILENAME
        payload = render_digest_json(digest).encode("utf-8")

        staging = target.with_name(target.name + ".tmp")
        staging.write_bytes(payload)
        staging.replace(target)

        file_info = GeneratedFile(
            path=DIGEST_FILENAME,
            absolute_path=str(target.resolve()),
            bytes_written=len(payload),
            sha256=hashlib.sha256(payload).hexdigest(),
        )
        self._log.info(
            "digest_json_written",
            path=file_info.path,
            items=len(digest.items),
            bytes_written=file_info.bytes_written,
            sha256=file_info.sha256[:12],
        )
        return file_info
