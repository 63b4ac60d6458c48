"""Registration and sign-in on top of the hosted identity provider."""

from dataclasses import dataclass
from datetime import datetime

import structlog

from core.exceptions import AppException, ProfileNotFoundError, RoleMismatchError
from domain.entities.profile import Profile, UserRole
from domain.entities.session import AuthSession
from domain.gateways.identity import IIdentityGateway
from domain.services.profile_service import ProfileService

logger = structlog.get_logger()


@dataclass
class SignInResult:
    """A session plus the profile it belongs to."""

    session: AuthSession
    profile: Profile


class AuthService:
    """Service layer for registration, sign-in and sign-out."""

    def __init__(self, identity: IIdentityGateway, profiles: ProfileService) -> None:
        self._identity = identity
        self._profiles = profiles

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole,
        department: str | None = None,
    ) -> Profile:
        """Create the auth identity, then its profile. The role is fixed from here on."""
        user_id = await self._identity.sign_up(
            email, password, metadata={"full_name": full_name, "role": role.value}
        )
        try:
            profile = await self._profiles.create(
                user_id=user_id,
                full_name=full_name,
                role=role,
                department=department,
            )
        except AppException as e:
            # The identity now exists without a profile and needs manual cleanup
            logger.error(
                "registration_profile_failed",
                user_id=str(user_id),
                error_code=e.error_code.value,
                message=e.message,
            )
            raise
        logger.info("user_registered", user_id=str(user_id), role=role.value)
        return profile

    async def sign_in(
        self,
        email: str,
        password: str,
        role: UserRole,
        now: datetime | None = None,
    ) -> SignInResult:
        """Sign in and confirm the selected role matches the registered one.

        If anything fails after the provider issued a session, that session is
        revoked before the error propagates.
        """
        session = await self._identity.sign_in(email, password)

        try:
            try:
                profile = await self._profiles.get(session.user_id)
            except ProfileNotFoundError:
                logger.warning("sign_in_without_profile", user_id=str(session.user_id))
                raise

            if profile.role != role:
                raise RoleMismatchError(profile.role.value)

            profile.last_seen = await self._profiles.heartbeat(session.user_id, now)
        except AppException:
            await self._revoke_quietly(session)
            raise

        logger.info("user_signed_in", user_id=str(session.user_id), role=role.value)
        return SignInResult(session=session, profile=profile)

    async def sign_out(self, access_token: str) -> None:
        await self._identity.sign_out(access_token)

    async def _revoke_quietly(self, session: AuthSession) -> None:
        """Best-effort cleanup; the original error is the one the caller sees."""
        try:
            await self._identity.sign_out(session.access_token)
        except AppException as e:
            logger.warning(
                "sign_out_cleanup_failed",
                user_id=str(session.user_id),
                error=e.message,
            )
