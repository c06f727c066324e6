"""Application settings loading."""

from .app import AppSettings, PipelineConfig, get_settings


__all__ = ["AppSettings", "PipelineConfig", "get_settings"]
