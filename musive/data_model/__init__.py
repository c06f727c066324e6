"""Shared data models."""

from musive.data_model.base import StrictBaseModel
from musive.data_model.news import NewsItem


__all__ = ["NewsItem", "StrictBaseModel"]
