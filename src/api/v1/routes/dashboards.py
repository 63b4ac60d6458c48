"""Role-scoped dashboard routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentProfile, OfficerProfile, WorkerProfile
from api.v1.dependencies import get_dashboard_service
from api.v1.schemas.complaint import ComplaintResponse
from api.v1.schemas.dashboard import (
    CitizenDashboardResponse,
    OfficerDashboardResponse,
    StatusCounts,
    WorkerDashboardResponse,
    WorkerStats,
)
from api.v1.schemas.profile import OnlineProfileResponse
from core.rate_limit import limiter
from domain.entities.complaint import ComplaintStatus
from domain.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboards", tags=["dashboards"])


def _counts(counts: dict[ComplaintStatus, int]) -> StatusCounts:
    return StatusCounts(**{status.value: total for status, total in counts.items()})


@router.get("/citizen", response_model=CitizenDashboardResponse, summary="Citizen dashboard")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def citizen_dashboard(
    request: Request,
    profile: CurrentProfile,
    service: DashboardService = Depends(get_dashboard_service),
) -> CitizenDashboardResponse:
    """The caller's complaints, newest first."""
    view = await service.citizen_view(profile.user_id)
    return CitizenDashboardResponse(
        complaints=[ComplaintResponse.model_validate(c) for c in view.complaints],
        counts=_counts(view.counts),
    )


@router.get("/officer", response_model=OfficerDashboardResponse, summary="Officer dashboard")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def officer_dashboard(
    request: Request,
    profile: OfficerProfile,
    service: DashboardService = Depends(get_dashboard_service),
    status_filter: ComplaintStatus | None = Query(None, alias="status"),
) -> OfficerDashboardResponse:
    """All complaints, global status counts and the presence roster."""
    view = await service.officer_view(status_filter)
    return OfficerDashboardResponse(
        complaints=[ComplaintResponse.model_validate(c) for c in view.complaints],
        status_filter=view.status_filter,
        total=view.total,
        counts=_counts(view.counts),
        online=[OnlineProfileResponse.model_validate(p) for p in view.online],
        poll_interval_seconds=view.poll_interval_seconds,
    )


@router.get("/worker", response_model=WorkerDashboardResponse, summary="Worker dashboard")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def worker_dashboard(
    request: Request,
    profile: WorkerProfile,
    service: DashboardService = Depends(get_dashboard_service),
    status_filter: ComplaintStatus = Query(ComplaintStatus.ONGOING, alias="status"),
    fallback_last: bool = Query(False),
) -> WorkerDashboardResponse:
    """Ongoing or closed complaints ranked by urgency, with task stats."""
    view = await service.worker_view(status_filter, fallback_last=fallback_last)
    return WorkerDashboardResponse(
        complaints=[ComplaintResponse.model_validate(c) for c in view.complaints],
        status_filter=view.status_filter,
        stats=WorkerStats(
            assigned=view.assigned,
            in_progress=view.in_progress,
            completed_today=view.completed_today,
            fallback_scored=view.fallback_scored,
        ),
    )
