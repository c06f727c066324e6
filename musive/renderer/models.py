"""Renderer data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedFile:
    """A file written by the renderer.

    Attributes:
        path: Path relative to the output directory.
        absolute_path: Absolute path to the file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of the content.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str
