from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Mapping

from bson.errors import BSONError
from pydantic import ValidationError
from pymongo import ReplaceOne
from pymongo.errors import PyMongoError

from ogcache.core.collections import CollectionNames
from ogcache.core.errors import CacheLoadError, CacheSaveError, OpenGraphError
from ogcache.models.opengraph.document import ArchivedEntry, ArchiveIdentity
from ogcache.models.opengraph.record import OpenGraph
from ogcache.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CacheArchive(BaseRepository):
    """Durable storage for whole caches, one document per cached URL."""

    COLLECTION_NAME = CollectionNames.OPENGRAPH_CACHE

    async def ensure_indexes(self) -> None:
        await self._col.create_index(
            [("name", 1), ("group_id", 1), ("url", 1)], unique=True
        )

    async def load(self, identity: ArchiveIdentity) -> dict[str, OpenGraph]:
        """Return the archived cache for *identity*.

        Raises:
            CacheLoadError: nothing was saved for *identity*, the stored
                data no longer validates, or MongoDB failed.
        """
        try:
            found = await self._col.find(identity.as_filter()).to_list(length=None)
        except (PyMongoError, BSONError) as exc:
            raise CacheLoadError(f"Could not read cache {identity}") from exc

        if not found:
            raise CacheLoadError(f"No archived cache for {identity}")

        entries: dict[str, OpenGraph] = {}
        for document in found:
            document.pop("_id", None)
            try:
                entry = ArchivedEntry(**document)
            except (ValidationError, OpenGraphError) as exc:
                raise CacheLoadError(f"Archived cache {identity} is corrupt: {exc}") from exc
            entries[entry.url] = entry.record
        return entries

    async def save(self, identity: ArchiveIdentity, entries: Mapping[str, OpenGraph]) -> None:
        """Replace the archived cache for *identity* with *entries*.

        Every entry is upserted under a fresh generation, then entries left
        over from earlier saves are removed.

        Raises:
            CacheSaveError: MongoDB or BSON encoding rejected the write.
        """
        generation = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        requests = []
        for url, record in entries.items():
            entry = ArchivedEntry(
                name=identity.name,
                group_id=identity.group_id,
                url=url,
                record=record,
                generation=generation,
                saved_at=now,
            )
            payload = entry.model_dump(mode="json", exclude={"saved_at"})
            payload["saved_at"] = entry.saved_at
            requests.append(
                ReplaceOne({**identity.as_filter(), "url": url}, payload, upsert=True)
            )

        try:
            if requests:
                await self._col.bulk_write(requests, ordered=False)
            await self._col.delete_many(
                {**identity.as_filter(), "generation": {"$ne": generation}}
            )
        except (PyMongoError, BSONError) as exc:
            logger.exception("MongoDB save failed for cache %s", identity)
            raise CacheSaveError(f"Could not save cache {identity}") from exc
