"""HTTP transport for feed retrieval."""

from musive.fetch.client import FeedFetcher


__all__ = ["FeedFetcher"]
