"""Turn raw HTML or extracted tag pairs into an ``OpenGraph`` record."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from ogcache.core.errors import OpenGraphError
from ogcache.models.opengraph.record import OpenGraph, decode_entities

logger = logging.getLogger(__name__)


def parse_tags(pairs: Iterable[tuple[str, str]]) -> OpenGraph:
    """Validate ``(key, value)`` pairs and return the record.

    Raises:
        EmptyInputError: no pairs at all.
        MissingTitleError: no ``title`` pair.
        MissingURLError: no ``url`` pair holding an absolute http(s) URL.
    """
    return OpenGraph.from_pairs(pairs)


def scan_meta_tags(html: str) -> list[Tag]:
    """Return every ``<meta>`` element in *html*, in document order.

    A ``<head>`` is not required; input without meta elements gives ``[]``.
    """
    soup = BeautifulSoup(html, "html.parser")
    return soup.find_all("meta")


def strip_namespace(prop: str) -> str:
    """Drop the namespace prefix: ``og:image:url`` -> ``image:url``.

    A property without any colon has no OpenGraph name and maps to ``""``.
    """
    _, colon, name = prop.partition(":")
    return name if colon else ""


def _attribute(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value


def extract_pairs(html: str, log_parsing: bool = False) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for tag in scan_meta_tags(html):
        if log_parsing:
            logger.debug("meta tag: %s", tag)
        prop = _attribute(tag, "property")
        content = _attribute(tag, "content")
        if prop is None or content is None:
            continue
        pairs.append((strip_namespace(prop), decode_entities(content)))
    return pairs


def parse_html(html: str, log_parsing: bool = False) -> OpenGraph:
    """Parse the ``<meta property=... content=...>`` tags of a page.

    With *log_parsing* every scanned tag is logged, and the raw HTML is
    logged when the page fails validation.  The error is re-raised as is.
    """
    pairs = extract_pairs(html, log_parsing=log_parsing)
    try:
        return parse_tags(pairs)
    except OpenGraphError as exc:
        logger.info("Error creating OpenGraph record: %s", exc)
        if log_parsing:
            logger.debug("HTML source:\n%s", html)
        raise
