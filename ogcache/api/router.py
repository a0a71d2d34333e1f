from fastapi import APIRouter

from ogcache.api.opengraph.routes import router as opengraph_router

router = APIRouter()
router.include_router(opengraph_router)
