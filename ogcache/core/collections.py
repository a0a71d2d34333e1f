from __future__ import annotations


class CollectionNames:
    """MongoDB collection names used by the repositories."""

    OPENGRAPH_CACHE = "opengraph_cache"
