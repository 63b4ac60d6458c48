"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1.dependencies import (
    get_complaint_service,
    get_dashboard_service,
    get_urgency_scorer,
)
from api.v1.router import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import dispose_engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    scorer = get_urgency_scorer()
    if not scorer.is_configured:
        logger.warning(
            "urgency_scoring_unconfigured",
            fallback_score=settings.urgency_fallback_score,
        )
    logger.info("application_started", environment=settings.app_env)
    yield
    await scorer.aclose()
    # Services built on the closed scorer must not outlive it
    get_dashboard_service.cache_clear()
    get_complaint_service.cache_clear()
    get_urgency_scorer.cache_clear()
    await dispose_engine()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Civic Complaint Reporting\n\n"
            "Citizens submit complaints, officers triage them and workers "
            "resolve them.\n\n"
            "### Lifecycle\n"
            "`pending` → `endorsed` → `ongoing` → `closed`. Officers endorse and "
            "start work, workers close. Steps cannot be skipped or reversed.\n\n"
            "### Urgency\n"
            "Each complaint is scored once at submission (0 to 1). "
            "`score_origin` is `fallback` when the scoring service was unavailable.\n\n"
            "### Authentication\n"
            "All endpoints (except `/health` and `/api/v1/auth/*`) require a valid "
            "Supabase access token in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH: 10 requests/minute"
        ),
        version="1.0.0",
        debug=settings.debug,
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "auth",
                "description": "Registration, sign-in and sign-out",
            },
            {
                "name": "profiles",
                "description": "Profile management and presence",
            },
            {
                "name": "complaints",
                "description": "Complaint submission and lifecycle",
            },
            {
                "name": "dashboards",
                "description": "Citizen, officer and worker views",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
