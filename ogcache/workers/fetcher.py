"""Async page fetcher.

``HttpStringFetcher`` turns a URL into response text; ``OpenGraphFetcher``
runs it and parses the result.  Neither caches, retries or keeps state
between calls, so one instance can serve any number of concurrent
fetches.  The ``httpx.AsyncClient`` is owned by the caller: build it with
``build_http_client`` and close it with ``HttpStringFetcher.aclose``.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ogcache.core.config import settings
from ogcache.models.opengraph.record import OpenGraph
from ogcache.services.opengraph.parser import parse_html

logger = logging.getLogger(__name__)


class StringFetcher(Protocol):
    async def fetch_text(self, url: str) -> str: ...


def build_http_client() -> httpx.AsyncClient:
    """Return an ``AsyncClient`` configured from ``settings``."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        follow_redirects=True,
        verify=settings.http_verify_ssl,
        headers={"User-Agent": settings.http_user_agent},
    )


class HttpStringFetcher:
    """Fetch a page body as text.

    Transport errors and non-2xx responses surface as ``httpx.HTTPError``
    subclasses, unchanged.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_text(self, url: str) -> str:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.text

    async def aclose(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()
            logger.info("HTTP client closed.")


class OpenGraphFetcher:
    """Fetch one page and parse its OpenGraph metadata."""

    def __init__(self, string_fetcher: StringFetcher, log_parsing: bool = False) -> None:
        self._string_fetcher = string_fetcher
        self._log_parsing = log_parsing

    async def fetch(self, url: str) -> OpenGraph:
        """Return the record for *url*.

        Raises:
            httpx.HTTPError: network, timeout or HTTP status failure.
            OpenGraphError: the page lacks the required OpenGraph tags.
        """
        try:
            source = await self._string_fetcher.fetch_text(url)
            return parse_html(source, log_parsing=self._log_parsing)
        except Exception as exc:
            logger.error("Error loading OpenGraph for page at %s: %r", url, exc)
            raise
