"""Loads and validates a sources.yaml registry override."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from musive.config.constants import COMPONENT_CONFIG
from musive.config.schemas.sources import SourcesConfig


logger = structlog.get_logger()

# Field-specific hints shown next to validation errors
FIELD_HINTS: dict[str, str] = {
    "id": "Use lowercase letters, numbers, hyphens, or underscores (e.g., 'billboard').",
    "url": "Must be a valid HTTP/HTTPS URL (e.g., 'https://example.com/feed.xml').",
    "name": "Must be a non-empty label, shown next to each digest item.",
}


class ConfigValidationError(Exception):
    """Raised when a sources file cannot be loaded or validated."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details (loc, msg, type).
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")

    def formatted(self) -> list[str]:
        """Format each error with a hint when one is known."""
        lines: list[str] = []
        for err in self.errors:
            line = f"{err['loc']}: {err['msg']}"
            hint = FIELD_HINTS.get(err["loc"].split(".")[-1])
            if hint:
                line = f"{line}\n    Hint: {hint}"
            lines.append(line)
        return lines


def load_sources(sources_path: Path) -> SourcesConfig:
    """Load and validate a sources.yaml file.

    Args:
        sources_path: Path to the YAML file.

    Returns:
        Validated SourcesConfig.

    Raises:
        ConfigValidationError: If the file is missing, not YAML, or invalid.
    """
    log = logger.bind(component=COMPONENT_CONFIG, file_path=str(sources_path))

    try:
        content_bytes = sources_path.read_bytes()
    except FileNotFoundError as e:
        log.error("config_file_not_found", error=str(e))
        raise ConfigValidationError(
            [{"loc": "file", "msg": str(e), "type": "file_not_found"}],
            str(sources_path),
        ) from e

    checksum = hashlib.sha256(content_bytes).hexdigest()

    try:
        data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
    except yaml.YAMLError as e:
        log.error("config_yaml_parse_error", error=str(e))
        raise ConfigValidationError(
            [{"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}],
            str(sources_path),
        ) from e

    try:
        config = SourcesConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(loc) for loc in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        log.error(
            "config_validation_failed",
            validation_error_count=len(errors),
            errors=errors,
        )
        raise ConfigValidationError(errors, str(sources_path)) from e

    log.info(
        "config_file_loaded",
        file_sha256=checksum,
        source_count=len(config.sources),
    )
    return config
