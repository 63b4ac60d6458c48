"""Profile and presence API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentProfile, CurrentUser, OfficerProfile
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import (
    HeartbeatResponse,
    OnlineProfileResponse,
    OnlineProfilesResponse,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.config import settings
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"model": ErrorResponse, "description": "No profile registered"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(request: Request, profile: CurrentProfile) -> ProfileDetailResponse:
    """The caller's profile, including the read-only role and department."""
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.patch(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Update my profile",
    responses={422: {"model": ErrorResponse, "description": "Only full_name may change"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Change the caller's full name. Role and department are fixed at registration."""
    profile = await service.update_full_name(user.id, body.full_name)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.post(
    "/me/heartbeat",
    response_model=HeartbeatResponse,
    summary="Refresh my presence",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def heartbeat(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> HeartbeatResponse:
    """Record that the caller is active right now."""
    seen_at = await service.heartbeat(user.id)
    return HeartbeatResponse(last_seen=seen_at)


@router.get(
    "/online",
    response_model=OnlineProfilesResponse,
    summary="Presence roster (officer)",
    responses={403: {"model": ErrorResponse, "description": "Officers only"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_online(
    request: Request,
    profile: OfficerProfile,
    service: ProfileService = Depends(get_profile_service),
) -> OnlineProfilesResponse:
    """Profiles seen within the presence window. Poll at `poll_interval_seconds`."""
    online = await service.list_online()
    return OnlineProfilesResponse(
        data=[OnlineProfileResponse.model_validate(p) for p in online],
        window_minutes=int(service.presence_window.total_seconds() // 60),
        poll_interval_seconds=settings.presence_poll_seconds,
    )
