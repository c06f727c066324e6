"""Configuration schemas."""

from musive.config.schemas.sources import SourceConfig, SourcesConfig


__all__ = ["SourceConfig", "SourcesConfig"]
