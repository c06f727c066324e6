"""Tests for digest ranking."""

from datetime import timedelta

import pytest

from musive.ranker.ranker import NewsRanker, compute_checksum, rank_news_items
from tests.helpers.fakes import make_news_item
from tests.helpers.time import FIXED_NOW


@pytest.mark.unit
class TestRankNewsItems:
    """Tests for rank_news_items."""

    def test_interest_then_recency(self) -> None:
        """Higher interest first; equal interest ordered newest first."""
        older_90 = make_news_item(
            "Older 90", interest_level=90, published_at=FIXED_NOW - timedelta(hours=5)
        )
        newer_90 = make_news_item(
            "Newer 90", interest_level=90, published_at=FIXED_NOW - timedelta(hours=1)
        )
        low_50 = make_news_item("Low 50", interest_level=50, published_at=FIXED_NOW)

        ranked = rank_news_items([low_50, older_90, newer_90])

        assert [i.title for i in ranked] == ["Newer 90", "Older 90", "Low 50"]

    def test_truncates_to_fifteen(self) -> None:
        """Twenty items become a digest of fifteen."""
        items = [
            make_news_item(f"Item {i}", interest_level=i + 1, published_at=FIXED_NOW)
            for i in range(20)
        ]

        ranked = rank_news_items(items, digest_size=15)

        assert len(ranked) == 15
        assert ranked[0].interest_level == 20
        assert ranked[-1].interest_level == 6

    def test_no_padding(self) -> None:
        """Five items stay five."""
        items = [make_news_item(f"Item {i}") for i in range(5)]
        assert len(rank_news_items(items, digest_size=15)) == 5

    def test_missing_interest_ranks_last(self) -> None:
        """Interest 0 sorts below any rated item."""
        unrated = make_news_item("Unrated", interest_level=0, published_at=FIXED_NOW)
        rated = make_news_item(
            "Rated", interest_level=1, published_at=FIXED_NOW - timedelta(days=1)
        )

        ranked = rank_news_items([unrated, rated])

        assert [i.title for i in ranked] == ["Rated", "Unrated"]

    def test_equal_keys_keep_input_order(self) -> None:
        """Ties on interest and time preserve input order."""
        items = [
            make_news_item(f"Tie {i}", interest_level=70, published_at=FIXED_NOW)
            for i in range(4)
        ]
        assert rank_news_items(items) == items

    def test_empty(self) -> None:
        """No items ranks to no items."""
        assert rank_news_items([]) == []


@pytest.mark.unit
class TestNewsRanker:
    """Tests for NewsRanker."""

    def test_rank_uses_digest_size(self) -> None:
        """The configured digest size bounds the output."""
        items = [make_news_item(f"Item {i}", interest_level=10 + i) for i in range(10)]
        ranked = NewsRanker(digest_size=3).rank(items)
        assert [i.interest_level for i in ranked] == [19, 18, 17]

    def test_checksum_depends_on_order(self) -> None:
        """The checksum changes when the order changes."""
        a = make_news_item("A")
        b = make_news_item("B")
        assert compute_checksum([a, b]) != compute_checksum([b, a])
        assert compute_checksum([a, b]) == compute_checksum([a, b])
