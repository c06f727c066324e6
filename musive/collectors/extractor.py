"""Turns raw feed entries into normalized candidates.

Filtering happens here, before any classifier call: entries without a
parseable publish time or older than the lookback window never reach
the judge, and each source contributes at most ``max_items`` of its
newest qualifying entries.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any

from bs4 import BeautifulSoup


UNTITLED_PLACEHOLDER = "Untitled"
DEFAULT_LOOKBACK_HOURS = 24
DEFAULT_MAX_ITEMS = 20
DEFAULT_EXCERPT_MAX_CHARS = 600

_WHITESPACE_RE = re.compile(r"\s+")

# Attribute checked after ``src`` for lazy-loaded images
_LAZY_SRC_ATTR = "data-lazy-src"

FeedEntry = Mapping[str, Any]


@dataclass(frozen=True)
class Candidate:
    """A feed entry normalized but not yet judged.

    Attributes:
        title: Entry title, or a placeholder when empty.
        link: Entry URL (may be empty).
        published_at: Publish time in UTC.
        excerpt: Plain-text excerpt for the classifier.
        thumbnail: Thumbnail URL without query string (may be empty).
    """

    title: str
    link: str
    published_at: datetime
    excerpt: str
    thumbnail: str = ""


def extract_published_at(entry: FeedEntry) -> datetime | None:
    """Extract the publish time of an entry in UTC.

    Tries feedparser's parsed structs first (``published_parsed``, then
    ``updated_parsed``; both are UTC), then the raw RFC 2822 strings.

    Args:
        entry: Feedparser entry.

    Returns:
        Timezone-aware datetime, or None if no date can be parsed.
    """
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime(*parsed[:6], tzinfo=UTC)
            except (TypeError, ValueError):
                continue

    for key in ("published", "updated"):
        raw = entry.get(key)
        if not raw:
            continue
        try:
            dt = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            continue
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)

    return None


def _embedded_html(entry: FeedEntry) -> str:
    """Full content (``content:encoded``) of an entry, if any."""
    for content in entry.get("content") or []:
        value = content.get("value") if isinstance(content, Mapping) else None
        if value:
            return str(value)
    return ""


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def _first_image_src(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    img = soup.find("img")
    if img is None:
        return ""
    for attr in ("src", _LAZY_SRC_ATTR):
        value = img.get(attr)
        if value:
            return str(value).strip()
    return ""


def resolve_thumbnail(entry: FeedEntry) -> str:
    """Resolve an entry's thumbnail URL.

    Order: ``media:content`` URL, enclosure URL, first ``<img>`` of the
    embedded HTML content (``src`` then ``data-lazy-src``). The query
    string is stripped from whatever is found.

    Args:
        entry: Feedparser entry.

    Returns:
        Thumbnail URL, or an empty string.
    """
    thumbnail = ""

    for media in entry.get("media_content") or []:
        url = media.get("url") if isinstance(media, Mapping) else None
        if url:
            thumbnail = str(url)
            break

    if not thumbnail:
        for enclosure in entry.get("enclosures") or []:
            if not isinstance(enclosure, Mapping):
                continue
            url = enclosure.get("href") or enclosure.get("url")
            if url:
                thumbnail = str(url)
                break

    if not thumbnail:
        html = _embedded_html(entry)
        if html:
            thumbnail = _first_image_src(html)

    return _strip_query(thumbnail) if thumbnail else ""


def html_to_text(html: str) -> str:
    """Strip markup and collapse whitespace runs to single spaces."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_excerpt(entry: FeedEntry, max_chars: int = DEFAULT_EXCERPT_MAX_CHARS) -> str:
    """Build the classifier excerpt from the richest content field.

    Uses the full content, else the summary, else the description.

    Args:
        entry: Feedparser entry.
        max_chars: Character budget.

    Returns:
        Plain text, at most ``max_chars`` long.
    """
    html = (
        _embedded_html(entry)
        or entry.get("summary")
        or entry.get("description")
        or ""
    )
    return html_to_text(str(html))[:max_chars]


def extract_candidate(
    entry: FeedEntry,
    now: datetime,
    lookback_hours: int = DEFAULT_LOOKBACK_HOURS,
    excerpt_max_chars: int = DEFAULT_EXCERPT_MAX_CHARS,
) -> Candidate | None:
    """Normalize one feed entry, or skip it.

    Args:
        entry: Feedparser entry.
        now: Run time.
        lookback_hours: Entries must be strictly newer than now minus this.
        excerpt_max_chars: Excerpt character budget.

    Returns:
        Candidate, or None when the entry has no usable publish time or
        is too old.
    """
    published_at = extract_published_at(entry)
    if published_at is None:
        return None

    cutoff = now - timedelta(hours=lookback_hours)
    if published_at <= cutoff:
        return None

    title = str(entry.get("title") or "").strip() or UNTITLED_PLACEHOLDER

    return Candidate(
        title=title,
        link=str(entry.get("link") or "").strip(),
        published_at=published_at,
        excerpt=extract_excerpt(entry, excerpt_max_chars),
        thumbnail=resolve_thumbnail(entry),
    )


def select_recent_candidates(
    entries: Iterable[FeedEntry],
    now: datetime,
    lookback_hours: int = DEFAULT_LOOKBACK_HOURS,
    max_items: int = DEFAULT_MAX_ITEMS,
    excerpt_max_chars: int = DEFAULT_EXCERPT_MAX_CHARS,
) -> list[Candidate]:
    """Extract the newest qualifying candidates of one feed.

    Args:
        entries: Feedparser entries.
        now: Run time.
        lookback_hours: Recency window.
        max_items: Maximum candidates returned.
        excerpt_max_chars: Excerpt character budget.

    Returns:
        At most ``max_items`` candidates, newest first (ties by link).
    """
    candidates = [
        candidate
        for entry in entries
        if (
            candidate := extract_candidate(
                entry,
                now,
                lookback_hours=lookback_hours,
                excerpt_max_chars=excerpt_max_chars,
            )
        )
        is not None
    ]
    candidates.sort(key=lambda c: (-c.published_at.timestamp(), c.link))
    return candidates[:max_items]
