"""Async HTTP client for feed retrieval."""

import time
from urllib.parse import urlparse

import httpx
import structlog

from musive.collectors.errors import CollectorErrorClass, SourceUnavailableError
from musive.config.schemas.sources import SourceConfig


logger = structlog.get_logger()

_ACCEPT = (
    "application/rss+xml, application/atom+xml, application/xml;q=0.9, "
    "text/xml;q=0.9, */*;q=0.8"
)


class FeedFetcher:
    """Fetches feed bodies over one shared ``httpx.AsyncClient``.

    A single attempt per source; any failure surfaces as
    ``SourceUnavailableError`` for the collector to absorb.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        user_agent: str = "musive-digest/0.1",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout_seconds: Per-request timeout.
            user_agent: User-Agent header.
            http_client: Optional client (tests pass one with a mock transport).
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
        )
        self._headers = {"User-Agent": user_agent, "Accept": _ACCEPT}
        self._log = logger.bind(component="fetch")

    async def fetch(self, source: SourceConfig) -> bytes:
        """Fetch a source's feed body.

        Args:
            source: Source to fetch.

        Returns:
            Raw response body.

        Raises:
            SourceUnavailableError: On network errors or non-2xx status.
        """
        start_ns = time.perf_counter_ns()
        log = self._log.bind(source_id=source.id, domain=urlparse(source.url).netloc)

        try:
            response = await self._http.get(
                source.url,
                headers={**self._headers, **source.headers},
            )
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(
                CollectorErrorClass.FETCH,
                f"{type(exc).__name__}: {exc}",
                source_id=source.id,
            ) from exc

        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        log.info(
            "fetch_complete",
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )

        if not response.is_success:
            raise SourceUnavailableError(
                CollectorErrorClass.FETCH,
                f"HTTP {response.status_code}",
                source_id=source.id,
                status_code=response.status_code,
            )

        return response.content

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
