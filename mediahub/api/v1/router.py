from fastapi import APIRouter

from mediahub.api.v1.endpoints.health import router as health_router
from mediahub.api.v1.endpoints.gdrive import router as gdrive_router


router = APIRouter(prefix="/v1")
router.include_router(health_router, tags=["health"])
router.include_router(gdrive_router, tags=["gdrive"])
