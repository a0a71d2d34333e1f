from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ogcache.models.opengraph.record import OpenGraph


class TagResponse(BaseModel):
    key: str
    value: str


class OpenGraphResponse(BaseModel):
    """API response shape for a page's OpenGraph metadata."""

    url: str
    title: str
    type: str
    description: Optional[str] = None
    site_name: Optional[str] = None
    display_name: str
    images: list[str]
    tags: list[TagResponse]

    @classmethod
    def from_record(cls, record: OpenGraph) -> OpenGraphResponse:
        return cls(
            url=record.url,
            title=record.title,
            type=record.type,
            description=record.description,
            site_name=record.site_name,
            display_name=record.display_name,
            images=[image.url for image in record.images()],
            tags=[TagResponse(key=key, value=value) for key, value in record.pairs()],
        )
