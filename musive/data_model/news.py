"""NewsItem: the unit that flows through dedupe, ranking, and the digest."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import Field

from musive.data_model.base import StrictBaseModel


class NewsItem(StrictBaseModel):
    """A classified, accepted article from one feed source.

    Only candidates the classifier accepted become NewsItems.

    Attributes:
        source: Registry label of the feed the item came from.
        title: Article title.
        link: Article URL (may be empty).
        summary: Summary produced by the classifier.
        thumbnail: Thumbnail URL without query string (may be empty).
        published_at: Publish time (timezone-aware).
        interest_level: Estimated reader interest, 0 when unset.
    """

    source: Annotated[str, Field(min_length=1)]
    title: str
    link: str = ""
    summary: str = ""
    thumbnail: str = ""
    published_at: datetime
    interest_level: Annotated[int, Field(ge=0, le=100)] = 0

    def to_judge_record(self, index: int) -> dict[str, Any]:
        """Serialize for the deduplication judge.

        Args:
            index: Position of the item in the request list.

        Returns:
            Record with the item's positional index and judge-facing fields.
        """
        return {
            "index": index,
            "source": self.source,
            "title": self.title,
            "summary": self.summary,
            "thumbnail": self.thumbnail,
            "interestLevel": self.interest_level,
            "pubDate": self.published_at.isoformat(),
        }

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize for digest output."""
        return {
            "source": self.source,
            "title": self.title,
            "link": self.link,
            "summary": self.summary,
            "thumbnail": self.thumbnail,
            "pubDate": self.published_at.isoformat(),
            "interestLevel": self.interest_level,
        }
