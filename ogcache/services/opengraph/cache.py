from __future__ import annotations

from typing import Mapping, Optional

from ogcache.models.opengraph.record import OpenGraph


class CacheStore:
    """In-memory map of page URL to its OpenGraph record.

    Entries are never expired or updated in place; ``insert`` replaces the
    whole record for a URL.
    """

    def __init__(self, entries: Optional[Mapping[str, OpenGraph]] = None) -> None:
        self._entries: dict[str, OpenGraph] = dict(entries or {})

    def get(self, url: str) -> Optional[OpenGraph]:
        return self._entries.get(url)

    def insert(self, url: str, record: OpenGraph) -> None:
        self._entries[url] = record

    def merge(self, entries: Mapping[str, OpenGraph]) -> None:
        """Add *entries* for URLs not already cached."""
        for url, record in entries.items():
            self._entries.setdefault(url, record)

    def urls(self) -> list[str]:
        return list(self._entries)

    def snapshot(self) -> dict[str, OpenGraph]:
        """Return a copy of all entries, safe to hand to the archive."""
        return dict(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
