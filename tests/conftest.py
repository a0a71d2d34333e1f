from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ogcache.main import app
from ogcache.services.opengraph.retriever import CachingRetriever


@pytest.fixture
def retriever():
    return AsyncMock(spec=CachingRetriever)


@pytest.fixture
def client(retriever):
    """TestClient with lifespan startup/shutdown hooks fully mocked."""
    with (
        patch(
            "ogcache.core.database.DatabaseManager.connect",
            new_callable=AsyncMock,
        ),
        patch(
            "ogcache.core.database.DatabaseManager.disconnect",
            new_callable=AsyncMock,
        ),
        patch(
            "ogcache.core.database.DatabaseManager.get_collection",
            return_value=MagicMock(),
        ),
        patch(
            "ogcache.repositories.opengraph.archive.CacheArchive.ensure_indexes",
            new_callable=AsyncMock,
        ),
        patch(
            "ogcache.main.CachingRetriever.open",
            new_callable=AsyncMock,
            return_value=retriever,
        ),
        patch(
            "ogcache.workers.fetcher.HttpStringFetcher.aclose",
            new_callable=AsyncMock,
        ),
    ):
        with TestClient(app) as c:
            yield c
