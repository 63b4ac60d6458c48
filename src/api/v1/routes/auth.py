"""Registration, sign-in and sign-out routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import AccessToken
from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, SessionResponse
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse
from core.rate_limit import limiter
from domain.entities.profile import UserRole
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

DASHBOARD_BY_ROLE = {
    UserRole.CITIZEN: "citizen",
    UserRole.OFFICER: "officer",
    UserRole.WORKER: "worker",
}


@router.post(
    "/register",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        401: {"model": ErrorResponse, "description": "Registration rejected"},
        409: {"model": ErrorResponse, "description": "Profile already exists"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> ProfileDetailResponse:
    """Register with Supabase Auth and create the profile. The role cannot be changed later."""
    profile = await service.register(
        email=body.email,
        password=body.password,
        full_name=body.full_name,
        role=body.role,
        department=body.department,
    )
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign in",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        403: {"model": ErrorResponse, "description": "Selected role does not match"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Sign in with email, password and the role the user registered with."""
    result = await service.sign_in(body.email, body.password, body.role)
    session = result.session
    return LoginResponse(
        session=SessionResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            token_type=session.token_type,
            expires_in=session.expires_in,
            user_id=session.user_id,
        ),
        profile=ProfileResponse.model_validate(result.profile),
        dashboard=DASHBOARD_BY_ROLE[result.profile.role],
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign out",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def logout(
    request: Request,
    token: AccessToken,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the caller's session."""
    await service.sign_out(token)
    return MessageResponse(message="Signed out")
