"""In-memory stand-ins for the feed source and the content-judgment service."""

import json
from collections.abc import Callable
from datetime import datetime
from email.utils import format_datetime

from musive.data_model.news import NewsItem
from musive.dedupe.prompts import SYSTEM_INSTRUCTION as DEDUPE_INSTRUCTION


Verdict = dict[str, object] | Exception


def make_news_item(
    title: str = "Test Item",
    source: str = "Billboard",
    interest_level: int = 50,
    published_at: datetime | None = None,
    thumbnail: str = "",
) -> NewsItem:
    """Create a test NewsItem."""
    return NewsItem(
        source=source,
        title=title,
        link=f"https://example.com/{title.lower().replace(' ', '-')}",
        summary=f"Summary of {title}",
        thumbnail=thumbnail,
        published_at=published_at or datetime.fromisoformat("2025-03-14T08:00:00+00:00"),
        interest_level=interest_level,
    )


def rss_item(
    title: str,
    published_at: datetime | None,
    link: str = "",
    description: str = "",
    extra: str = "",
) -> str:
    """Render one RSS <item> element."""
    pub = f"<pubDate>{format_datetime(published_at)}</pubDate>" if published_at else ""
    return (
        "<item>"
        f"<title>{title}</title>"
        f"<link>{link}</link>"
        f"{pub}"
        f"<description><![CDATA[{description}]]></description>"
        f"{extra}"
        "</item>"
    )


def rss_feed(*items: str) -> bytes:
    """Wrap RSS items in a channel document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        "<channel><title>Test Feed</title><link>https://example.com</link>"
        "<description>Test</description>"
        f"{''.join(items)}"
        "</channel></rss>"
    ).encode()


def title_from_prompt(prompt: str) -> str:
    """Recover the candidate title from a classification prompt."""
    first_line = prompt.split("\n", 1)[0]
    return first_line.removeprefix("Title: ")


class ScriptedJudge:
    """LlmClient fake answering from per-title verdicts.

    Classification calls are answered from ``verdicts`` (keyed by title;
    unknown titles are rejected). Dedupe calls return ``dedupe_answer``,
    or raise it when it is an exception.
    """

    def __init__(
        self,
        verdicts: dict[str, Verdict] | None = None,
        dedupe_answer: Callable[[list[dict[str, object]]], object] | object = None,
    ) -> None:
        self.verdicts = verdicts or {}
        self.dedupe_answer = dedupe_answer
        self.classification_prompts: list[str] = []
        self.dedupe_requests: list[list[dict[str, object]]] = []
        self.closed = False

    async def generate_content(
        self, prompt: str, system_instruction: str | None = None
    ) -> str:
        if system_instruction == DEDUPE_INSTRUCTION:
            records = json.loads(prompt)
            self.dedupe_requests.append(records)
            answer = self.dedupe_answer
            if isinstance(answer, Exception):
                raise answer
            if callable(answer):
                answer = answer(records)
            if answer is None:
                answer = {"indicesToRemove": []}
            return answer if isinstance(answer, str) else json.dumps(answer)

        self.classification_prompts.append(prompt)
        verdict = self.verdicts.get(title_from_prompt(prompt), {"isValid": False})
        if isinstance(verdict, Exception):
            raise verdict
        return json.dumps(verdict)

    async def aclose(self) -> None:
        self.closed = True
