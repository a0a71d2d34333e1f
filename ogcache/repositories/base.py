"""Abstract base class for the MongoDB repositories.

Subclasses set ``COLLECTION_NAME`` and override ``ensure_indexes()``.

Example::

    class PreviewRepository(BaseRepository):
        COLLECTION_NAME = "previews"

        async def ensure_indexes(self) -> None:
            await self._col.create_index("url", unique=True)
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import ClassVar, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection

from ogcache.core.database import DatabaseManager

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseRepository")


class BaseRepository(ABC):
    """Base class that wires a repository to its Motor collection."""

    COLLECTION_NAME: ClassVar[str]

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._col = collection

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_db(cls: type[T], db: DatabaseManager) -> T:
        """Instantiate the repository using a connected ``DatabaseManager``.

        Usage::

            archive = CacheArchive.from_db(db)
        """
        return cls(db.get_collection(cls.COLLECTION_NAME))

    # ------------------------------------------------------------------
    # Index management (override in subclasses)
    # ------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create collection indexes.  Called once at startup.

        The default is a no-op.  MongoDB skips indexes that already exist.
        """
