"""Digest ranking: interest first, then recency, capped to the digest size."""

from musive.ranker.constants import DEFAULT_DIGEST_SIZE
from musive.ranker.ranker import NewsRanker, compute_checksum, rank_news_items


__all__ = [
    "DEFAULT_DIGEST_SIZE",
    "NewsRanker",
    "compute_checksum",
    "rank_news_items",
]
