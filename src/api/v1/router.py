"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.complaints import router as complaints_router
from api.v1.routes.dashboards import router as dashboards_router
from api.v1.routes.profiles import router as profiles_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(profiles_router)
router.include_router(complaints_router)
router.include_router(dashboards_router)
