from fastapi import APIRouter

from mozscape.api.metrics.routes import router as metrics_router

router = APIRouter()
router.include_router(metrics_router)
