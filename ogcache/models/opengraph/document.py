from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ogcache.models.opengraph.record import OpenGraph


class ArchiveIdentity(BaseModel):
    """Selects one persisted cache: a readable name plus an optional
    shared-storage group."""

    model_config = ConfigDict(frozen=True)

    name: str
    group_id: Optional[str] = None

    def as_filter(self) -> dict[str, Optional[str]]:
        return {"name": self.name, "group_id": self.group_id}

    def __str__(self) -> str:
        return f"{self.group_id}/{self.name}" if self.group_id else self.name


class ArchivedEntry(BaseModel):
    """Stored form of one cached record.

    Each URL gets its own document so a growing cache never approaches
    MongoDB's document size limit.  ``generation`` marks the save that last
    wrote the entry.
    """

    name: str
    group_id: Optional[str] = None
    url: str
    record: OpenGraph
    generation: str
    saved_at: datetime
