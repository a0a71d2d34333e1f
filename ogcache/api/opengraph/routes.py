from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from ogcache.core.errors import OpenGraphError
from ogcache.models.common import ErrorResponse
from ogcache.models.opengraph.record import is_http_url
from ogcache.models.opengraph.schemas import OpenGraphResponse
from ogcache.services.opengraph.retriever import CachingRetriever

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/opengraph", tags=["opengraph"])


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_retriever(request: Request) -> CachingRetriever:
    """FastAPI dependency returning the retriever built at startup."""
    return request.app.state.retriever


# ---------------------------------------------------------------------------
# GET /opengraph
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=OpenGraphResponse,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Return OpenGraph metadata for a URL",
)
async def get_opengraph(
    url: str,
    retriever: CachingRetriever = Depends(_get_retriever),
) -> OpenGraphResponse:
    """Return the OpenGraph metadata of the page at *url*.

    Served from the cache when the page was retrieved before; otherwise
    the page is fetched, parsed and cached.

    - **200** — metadata found
    - **422** — ``url`` missing or not an http(s) URL, or the page has no
      usable OpenGraph metadata
    - **502** — the page could not be fetched
    """
    if not is_http_url(url):
        raise HTTPException(status_code=422, detail=f"Invalid URL: {url}")

    try:
        record = await retriever.retrieve(url)
    except OpenGraphError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except httpx.HTTPError as exc:
        logger.warning("GET /opengraph fetch error for %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=f"Could not fetch {url}: {exc}")

    return OpenGraphResponse.from_record(record)
