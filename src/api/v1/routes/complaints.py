"""Complaint API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile, OfficerProfile, StaffProfile, WorkerProfile
from api.v1.dependencies import get_complaint_service
from api.v1.schemas.common import ErrorResponse, ListMeta
from api.v1.schemas.complaint import (
    ComplaintCreate,
    ComplaintDetailResponse,
    ComplaintListResponse,
    ComplaintResponse,
    ComplaintStatusUpdate,
)
from core.exceptions import DomainValidationError
from core.rate_limit import limiter
from domain.entities.complaint import Complaint, ComplaintStatus
from domain.entities.urgency import ScoreOrigin
from domain.services.complaint_service import ComplaintService
from domain.services.dashboard_service import WORKER_STATUSES

router = APIRouter(prefix="/complaints", tags=["complaints"])


@router.post(
    "",
    response_model=ComplaintDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a complaint",
    responses={
        201: {"description": "Complaint recorded with status 'pending'"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "The store rejected the write"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_complaint(
    request: Request,
    body: ComplaintCreate,
    profile: CurrentProfile,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintDetailResponse:
    """
    Submit a new complaint as the authenticated user.

    The description is scored for urgency once. If scoring is unavailable the
    complaint is still recorded, with `score_origin` set to `fallback`.
    """
    complaint = await service.create(
        reporter=profile,
        description=body.description,
        category=body.category,
    )
    return ComplaintDetailResponse(data=_build_complaint_response(complaint))


@router.get(
    "/mine",
    response_model=ComplaintListResponse,
    summary="List my complaints",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_my_complaints(
    request: Request,
    profile: CurrentProfile,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintListResponse:
    """Complaints filed by the caller, newest first."""
    complaints = await service.list_own(profile.user_id)
    return _build_list_response(complaints)


@router.get(
    "",
    response_model=ComplaintListResponse,
    summary="List all complaints (officer)",
    responses={403: {"model": ErrorResponse, "description": "Officers only"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_complaints(
    request: Request,
    profile: OfficerProfile,
    service: ComplaintService = Depends(get_complaint_service),
    status_filter: ComplaintStatus | None = Query(
        None, alias="status", description="Only complaints in this status"
    ),
) -> ComplaintListResponse:
    """Every complaint, newest first, optionally restricted to one status."""
    complaints = await service.list_all(status_filter)
    return _build_list_response(complaints)


@router.get(
    "/queue",
    response_model=ComplaintListResponse,
    summary="Urgency-ranked work queue (worker)",
    responses={403: {"model": ErrorResponse, "description": "Workers only"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_queue(
    request: Request,
    profile: WorkerProfile,
    service: ComplaintService = Depends(get_complaint_service),
    status_filter: ComplaintStatus = Query(
        ComplaintStatus.ONGOING, alias="status", description="ongoing or closed"
    ),
    fallback_last: bool = Query(
        False, description="Rank complaints with a fallback urgency score last"
    ),
) -> ComplaintListResponse:
    """Complaints in one status, most urgent first."""
    if status_filter not in WORKER_STATUSES:
        raise DomainValidationError(
            "Workers can only list ongoing or closed complaints",
            details={"status": status_filter.value},
        )
    complaints = await service.list_by_status(status_filter, fallback_last=fallback_last)
    return _build_list_response(complaints)


@router.get(
    "/{complaint_id}",
    response_model=ComplaintDetailResponse,
    summary="Get a complaint",
    responses={404: {"model": ErrorResponse, "description": "Complaint not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_complaint(
    request: Request,
    complaint_id: UUID,
    profile: CurrentProfile,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintDetailResponse:
    """Get a complaint by ID. Citizens only see their own."""
    complaint = await service.get(complaint_id, profile)
    return ComplaintDetailResponse(data=_build_complaint_response(complaint))


@router.patch(
    "/{complaint_id}/status",
    response_model=ComplaintDetailResponse,
    summary="Advance a complaint's status",
    responses={
        403: {"model": ErrorResponse, "description": "Role may not take this step"},
        404: {"model": ErrorResponse, "description": "Complaint not found"},
        409: {"model": ErrorResponse, "description": "Stale or illegal transition"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_complaint_status(
    request: Request,
    complaint_id: UUID,
    body: ComplaintStatusUpdate,
    profile: StaffProfile,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintDetailResponse:
    """
    Move a complaint one step along pending → endorsed → ongoing → closed.

    Officers endorse and start work; workers close. Repeating a request that
    already took effect returns the complaint unchanged.
    """
    complaint = await service.update_status(
        complaint_id,
        current=body.current_status,
        requested=body.status,
        actor=profile,
    )
    return ComplaintDetailResponse(data=_build_complaint_response(complaint))


def _build_complaint_response(complaint: Complaint) -> ComplaintResponse:
    """Convert domain entity to response schema."""
    return ComplaintResponse.model_validate(complaint)


def _build_list_response(complaints: list[Complaint]) -> ComplaintListResponse:
    return ComplaintListResponse(
        data=[_build_complaint_response(c) for c in complaints],
        meta=ListMeta(
            total=len(complaints),
            fallback_scored=sum(1 for c in complaints if c.score_origin == ScoreOrigin.FALLBACK),
        ),
    )
