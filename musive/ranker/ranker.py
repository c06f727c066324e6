"""Orders surviving items and truncates them to the digest size."""

import hashlib
import json

import structlog

from musive.data_model.news import NewsItem
from musive.ranker.constants import DEFAULT_DIGEST_SIZE, MISSING_INTEREST_LEVEL


logger = structlog.get_logger()


def _sort_key(item: NewsItem) -> tuple[int, float]:
    """Ascending sort key: higher interest first, then newer first."""
    interest = item.interest_level or MISSING_INTEREST_LEVEL
    return (-interest, -item.published_at.timestamp())


def rank_news_items(
    items: list[NewsItem],
    digest_size: int = DEFAULT_DIGEST_SIZE,
) -> list[NewsItem]:
    """Rank items for the digest.

    Pure and deterministic: descending interest level, ties broken by
    descending publish time, equal keys keep their input order. Fewer
    items than ``digest_size`` are returned as-is.

    Args:
        items: Deduplicated items.
        digest_size: Maximum number of items returned.

    Returns:
        Ranked list of at most ``digest_size`` items.
    """
    return sorted(items, key=_sort_key)[:digest_size]


def compute_checksum(items: list[NewsItem]) -> str:
    """Compute SHA-256 checksum of an ordered digest.

    Args:
        items: Digest items in output order.

    Returns:
        SHA-256 hex digest.
    """
    data = [item.to_json_dict() for item in items]
    json_str = json.dumps(
        data, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


class NewsRanker:
    """Logging wrapper around ``rank_news_items``."""

    def __init__(self, digest_size: int = DEFAULT_DIGEST_SIZE) -> None:
        self._digest_size = digest_size
        self._log = logger.bind(component="ranker")

    def rank(self, items: list[NewsItem]) -> list[NewsItem]:
        """Rank and truncate items.

        Args:
            items: Deduplicated items.

        Returns:
            Ranked digest items.
        """
        ranked = rank_news_items(items, self._digest_size)
        self._log.info(
            "ranker_complete",
            items_in=len(items),
            items_out=len(ranked),
            dropped=len(items) - len(ranked),
            output_checksum=compute_checksum(ranked)[:12],
        )
        return ranked
