"""Exception taxonomy.

Validation errors (``OpenGraphError`` subclasses) and network errors
(``httpx.HTTPError``) reach the caller.  Archive errors are absorbed by
``CachingRetriever`` and only ever logged.
"""

from __future__ import annotations


class OpenGraphError(Exception):
    """Raised when a set of tags does not make a valid OpenGraph record."""

    message = "Invalid OpenGraph metadata"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class EmptyInputError(OpenGraphError):
    message = "No meta tags were provided"


class MissingTitleError(OpenGraphError):
    message = "No title opengraph tag was provided"


class MissingURLError(OpenGraphError):
    message = "No URL opengraph tag was provided"


class CacheArchiveError(Exception):
    """Base class for failures of the durable cache archive."""


class CacheLoadError(CacheArchiveError):
    """No archive exists for the identity, or it could not be read."""


class CacheSaveError(CacheArchiveError):
    """The cache could not be written to the archive."""
