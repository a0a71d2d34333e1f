"""Validated OpenGraph metadata for a single page.

An ``OpenGraph`` record is an ordered, immutable sequence of
``(key, value)`` tags.  Keys are stored without their namespace prefix
(``og:title`` becomes ``title``) and may repeat: a page can declare several
images or authors.

Every construction path, including deserialisation of archived records,
runs the same checks: there is at least one tag, one of them is a
``title`` and one is a ``url`` holding an absolute http(s) URL.
"""

from __future__ import annotations

import html
from typing import Annotated, Iterable, Optional, Union

import httpx
from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    UrlConstraints,
    ValidationError,
    model_validator,
)

from ogcache.core.errors import EmptyInputError, MissingTitleError, MissingURLError
from ogcache.models.opengraph.keys import IMAGE_KEYS, WEBSITE_TYPE, OpenGraphKey

KeyLike = Union[OpenGraphKey, str]

# No length limit, unlike pydantic's HttpUrl.
WebUrl = Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]

_web_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(WebUrl)


def is_http_url(value: str) -> bool:
    """Return whether *value* is an absolute http(s) URL with a host."""
    try:
        _web_url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def is_url_reference(value: str) -> bool:
    """Return whether *value* parses as a URL, relative references included."""
    if not value.strip():
        return False
    try:
        httpx.URL(value)
    except httpx.InvalidURL:
        return False
    return True


def decode_entities(text: str) -> str:
    """Expand HTML character references; unknown entities pass through."""
    return html.unescape(text)


def _key_name(key: KeyLike) -> str:
    return key.value if isinstance(key, OpenGraphKey) else key


class OpenGraphTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class ImageRef(BaseModel):
    """An image referenced by a page.

    Only the URL is kept, exactly as the page wrote it; it may be relative.
    """

    model_config = ConfigDict(frozen=True)

    url: str


class OpenGraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    tags: tuple[OpenGraphTag, ...]

    @model_validator(mode="after")
    def _check_required_tags(self) -> OpenGraph:
        # First failing check wins.  These errors are not ValueErrors, so
        # pydantic lets them through unwrapped.
        if not self.tags:
            raise EmptyInputError()
        if not any(tag.key == OpenGraphKey.TITLE.value for tag in self.tags):
            raise MissingTitleError()
        if self._first_http_url() is None:
            raise MissingURLError()
        return self

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> OpenGraph:
        """Build a record from ``(key, value)`` pairs, validating it."""
        return cls(tags=tuple(OpenGraphTag(key=k, value=v) for k, v in pairs))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __getitem__(self, key: KeyLike) -> list[str]:
        name = _key_name(key)
        return [tag.value for tag in self.tags if tag.key == name]

    def get(self, key: KeyLike) -> Optional[list[str]]:
        """Return every value for *key*, or ``None`` when the page has none.

        Values are returned as found in the page; they are not
        entity-decoded.
        """
        values = self[key]
        return values or None

    def first(self, key: KeyLike) -> Optional[str]:
        values = self[key]
        return values[0] if values else None

    def contains(self, key: KeyLike, value: str) -> bool:
        name = _key_name(key)
        return any(tag.key == name and tag.value == value for tag in self.tags)

    def pairs(self) -> list[tuple[str, str]]:
        return [(tag.key, tag.value) for tag in self.tags]

    # ------------------------------------------------------------------
    # Scalar properties
    # ------------------------------------------------------------------

    # Required properties may repeat; the first value is the one used.

    @property
    def title(self) -> str:
        return decode_entities(self[OpenGraphKey.TITLE][0])

    @property
    def type(self) -> str:
        # "Any non-marked up webpage should be treated as og:type website."
        value = self.first(OpenGraphKey.TYPE)
        return WEBSITE_TYPE if value is None else value

    @property
    def description(self) -> Optional[str]:
        value = self.first(OpenGraphKey.DESCRIPTION)
        return decode_entities(value) if value is not None else None

    @property
    def site_name(self) -> Optional[str]:
        value = self.first(OpenGraphKey.SITE_NAME)
        return decode_entities(value) if value is not None else None

    @property
    def url(self) -> str:
        """The first ``url`` value that is an absolute http(s) URL, unaltered."""
        url = self._first_http_url()
        if url is None:
            raise MissingURLError()
        return url

    @property
    def display_name(self) -> str:
        site_name, title = self.site_name, self.title
        if site_name is not None and site_name != title:
            return f"{site_name} | {title}"
        return title

    def images(self) -> list[ImageRef]:
        """Return the page's images, de-duplicated in first-seen order.

        ``image``, ``image:url`` and ``image:secure_url`` values are pooled
        in that order.  Structured properties such as ``image:width`` are
        not matched to the image they describe.
        """
        seen: set[str] = set()
        images: list[ImageRef] = []
        for key in IMAGE_KEYS:
            for value in self[key]:
                if value in seen or not is_url_reference(value):
                    continue
                seen.add(value)
                images.append(ImageRef(url=value))
        return images

    def _first_http_url(self) -> Optional[str]:
        for value in self[OpenGraphKey.URL]:
            if is_http_url(value):
                return value
        return None
