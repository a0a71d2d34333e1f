"""Cached OpenGraph retrieval.

``CachingRetriever`` serves records from an in-memory ``CacheStore``,
fetches on a miss and saves the whole cache to its ``CacheArchive`` after
every successful fetch.  Archive failures never reach the caller: a cache
that cannot be loaded starts empty, and a cache that cannot be saved is
logged while the fetched record is still returned.

Without ``coalesce_requests``, two concurrent misses for one URL both
fetch and the later insert wins.  Use a single retriever per archive
identity; separate instances do not coordinate their saves.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict

from ogcache.core.errors import CacheArchiveError
from ogcache.models.opengraph.document import ArchiveIdentity
from ogcache.models.opengraph.record import OpenGraph
from ogcache.services.opengraph.cache import CacheStore

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> OpenGraph: ...


class Archive(Protocol):
    async def load(self, identity: ArchiveIdentity) -> dict[str, OpenGraph]: ...

    async def save(self, identity: ArchiveIdentity, entries: dict[str, OpenGraph]) -> None: ...


class RetrievalOptions(BaseModel):
    """Diagnostic and concurrency switches, all off by default.

    - ``log_parsing``: log every scanned meta tag, and the raw HTML of
      pages that fail validation.
    - ``log_duplicate_fetches``: remember fetched URLs and warn when one is
      fetched again instead of being served from the cache.
    - ``coalesce_requests``: concurrent misses for the same URL share one
      fetch.
    """

    model_config = ConfigDict(frozen=True)

    log_parsing: bool = False
    log_duplicate_fetches: bool = False
    coalesce_requests: bool = False


class CachingRetriever:
    def __init__(
        self,
        name: str,
        group_id: Optional[str] = None,
        options: Optional[RetrievalOptions] = None,
        *,
        fetcher: Fetcher,
        archive: Archive,
    ) -> None:
        self.identity = ArchiveIdentity(name=name, group_id=group_id)
        self.options = options or RetrievalOptions()
        self._fetcher = fetcher
        self._archive = archive
        self._cache = CacheStore()
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._retrieved_urls: set[str] = set()
        self._in_flight: dict[str, asyncio.Task[OpenGraph]] = {}

    @classmethod
    async def open(
        cls,
        name: str,
        group_id: Optional[str] = None,
        options: Optional[RetrievalOptions] = None,
        *,
        fetcher: Fetcher,
        archive: Archive,
    ) -> CachingRetriever:
        """Construct a retriever and load its archived cache."""
        retriever = cls(name, group_id, options, fetcher=fetcher, archive=archive)
        await retriever.load_cache()
        return retriever

    async def load_cache(self) -> None:
        """Load the archived cache into memory, once.

        Archived entries never replace records fetched in this session.  An
        archive that cannot be loaded leaves the cache as it is.
        """
        async with self._load_lock:
            if self._loaded:
                return
            try:
                entries = await self._archive.load(self.identity)
            except CacheArchiveError as exc:
                logger.debug("Starting with an empty cache for %s: %s", self.identity, exc)
                entries = {}
            self._cache.merge(entries)
            self._loaded = True

    def is_cached(self, url: str) -> bool:
        return url in self._cache

    def cached_urls(self) -> list[str]:
        return self._cache.urls()

    async def retrieve(self, url: str) -> OpenGraph:
        """Return the OpenGraph record for *url*, fetching it on a cache miss.

        Raises whatever the fetcher raises; the cache is left untouched
        when it does.
        """
        if not self._loaded:
            await self.load_cache()

        cached = self._cache.get(url)
        if cached is not None:
            return cached

        if not self.options.coalesce_requests:
            return await self._fetch_and_store(url)

        task = self._in_flight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(url))
            self._in_flight[url] = task
            task.add_done_callback(self._forget_in_flight)
        # Shielded so one caller's cancellation does not fail the others.
        return await asyncio.shield(task)

    retrieve_open_graph = retrieve

    def _forget_in_flight(self, task: asyncio.Task[OpenGraph]) -> None:
        for url, pending in list(self._in_flight.items()):
            if pending is task:
                del self._in_flight[url]
        # Mark the outcome as seen even when every waiter was cancelled.
        if not task.cancelled():
            task.exception()

    async def _fetch_and_store(self, url: str) -> OpenGraph:
        if self.options.log_duplicate_fetches and url in self._retrieved_urls:
            logger.warning("retrieved url %s for a second time", url)

        retrieved = await self._fetcher.fetch(url)
        self._cache.insert(url, retrieved)
        if self.options.log_duplicate_fetches:
            self._retrieved_urls.add(url)

        logger.info("retrieved URL %s", url)
        try:
            await self._archive.save(self.identity, self._cache.snapshot())
        except CacheArchiveError as exc:
            logger.error("Error archiving cache after %s: %s", url, exc)

        return retrieved
