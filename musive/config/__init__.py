"""Source registry configuration."""

from musive.config.loader import ConfigValidationError, load_sources
from musive.config.registry import DEFAULT_SOURCES, default_sources_config
from musive.config.schemas.sources import SourceConfig, SourcesConfig


__all__ = [
    "DEFAULT_SOURCES",
    "ConfigValidationError",
    "SourceConfig",
    "SourcesConfig",
    "default_sources_config",
    "load_sources",
]
