"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated, Any, Callable, Coroutine

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.v1.dependencies import get_profile_service
from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from domain.entities.profile import Profile, UserRole
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_provider() -> IAuthProvider:
    """Token validator shared across requests."""
    return JWTAuthProvider()


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_access_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
) -> str:
    """Raw bearer token, for handing back to the identity provider on sign-out."""
    if not credentials:
        raise AuthenticationError(message="Authorization header required")
    return credentials.credentials


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
AccessToken = Annotated[str, Depends(get_access_token)]


async def get_current_profile(
    user: CurrentUser,
    profiles: ProfileService = Depends(get_profile_service),
) -> Profile:
    """Load the caller's profile; its stored role drives every permission check."""
    return await profiles.get(user.id)


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


def require_role(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, Profile]]:
    """Build a dependency that only admits profiles with one of ``roles``."""

    async def dependency(profile: CurrentProfile) -> Profile:
        if profile.role not in roles:
            allowed = ", ".join(r.value for r in roles)
            raise AuthorizationError(f"This view requires one of these roles: {allowed}")
        return profile

    return dependency


OfficerProfile = Annotated[Profile, Depends(require_role(UserRole.OFFICER))]
WorkerProfile = Annotated[Profile, Depends(require_role(UserRole.WORKER))]
StaffProfile = Annotated[Profile, Depends(require_role(UserRole.OFFICER, UserRole.WORKER))]
