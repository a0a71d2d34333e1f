from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ogcache.api.router import router
from ogcache.core.config import settings
from ogcache.core.database import db
from ogcache.repositories.opengraph.archive import CacheArchive
from ogcache.services.opengraph.retriever import CachingRetriever, RetrievalOptions
from ogcache.workers.fetcher import HttpStringFetcher, OpenGraphFetcher, build_http_client


def _configure_logging() -> None:
    """Configure the ``ogcache`` logger namespace.

    ``logging.basicConfig`` is a no-op when the root logger already has
    handlers (uvicorn installs its own before the lifespan runs), so the
    namespace gets its own handler and does not propagate.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    app_log = logging.getLogger("ogcache")
    app_log.setLevel(level)
    if not app_log.handlers:
        app_log.addHandler(handler)
    app_log.propagate = False


_configure_logging()


def _retrieval_options() -> RetrievalOptions:
    return RetrievalOptions(
        log_parsing=settings.log_parsing,
        log_duplicate_fetches=settings.log_duplicate_fetches,
        coalesce_requests=settings.coalesce_requests,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # ── Startup ──────────────────────────────────────────────────────
    await db.connect()
    archive = CacheArchive.from_db(db)
    await archive.ensure_indexes()

    string_fetcher = HttpStringFetcher(build_http_client())
    options = _retrieval_options()
    app.state.retriever = await CachingRetriever.open(
        settings.cache_name,
        settings.cache_group_id,
        options,
        fetcher=OpenGraphFetcher(string_fetcher, log_parsing=options.log_parsing),
        archive=archive,
    )
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    await string_fetcher.aclose()
    await db.disconnect()


app = FastAPI(
    title="OpenGraph Cache",
    description="Async service that fetches, validates and caches OpenGraph metadata.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
