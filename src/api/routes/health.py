"""Liveness and dependency checks."""

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    urgency_scoring: str | None = None


async def _probe_database(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return f"unhealthy: {e}"
    return "healthy"


def _scoring_mode() -> str:
    # Without a key every complaint gets the fallback score
    return "configured" if settings.mistral_api_key else "fallback_only"


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe; touches no dependencies."""
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Readiness check covering the database and urgency scoring.

    A missing scoring key does not degrade the service: complaints are still
    accepted and ranked with the fallback score.
    """
    db_status = await _probe_database(db)

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=SERVICE_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
        urgency_scoring=_scoring_mode(),
    )
