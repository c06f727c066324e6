"""Tests for FeedFetcher over a mock transport."""

import asyncio
from collections.abc import Callable

import httpx
import pytest

from musive.collectors.errors import CollectorErrorClass, SourceUnavailableError
from musive.config.schemas.sources import SourceConfig
from musive.fetch.client import FeedFetcher


SOURCE = SourceConfig(
    id="nme",
    name="NME",
    url="https://www.nme.com/feed",
    headers={"Accept-Language": "en"},
)


def fetch(handler: Callable[[httpx.Request], httpx.Response]) -> bytes:
    """Fetch SOURCE through ``handler``."""

    async def go() -> bytes:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            fetcher = FeedFetcher(user_agent="test-agent/1.0", http_client=http)
            return await fetcher.fetch(SOURCE)

    return asyncio.run(go())


@pytest.mark.unit
class TestFeedFetcher:
    """Tests for FeedFetcher.fetch."""

    def test_returns_body_with_headers(self) -> None:
        """The body is returned; UA and source headers are sent."""
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            seen["lang"] = request.headers["accept-language"]
            return httpx.Response(200, content=b"<rss/>")

        assert fetch(handler) == b"<rss/>"
        assert seen == {"ua": "test-agent/1.0", "lang": "en"}

    def test_http_error_status(self) -> None:
        """Non-2xx responses are FETCH errors with the status code."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(SourceUnavailableError) as exc_info:
            fetch(handler)
        assert exc_info.value.error_class == CollectorErrorClass.FETCH
        assert exc_info.value.status_code == 503
        assert exc_info.value.source_id == "nme"

    def test_network_error(self) -> None:
        """Transport failures are FETCH errors without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SourceUnavailableError) as exc_info:
            fetch(handler)
        assert exc_info.value.status_code is None
        assert "ReadTimeout" in exc_info.value.message
