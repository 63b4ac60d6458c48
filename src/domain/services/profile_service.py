"""Profile service layer: profile reads/edits and presence."""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID

from core.exceptions import DomainValidationError, ProfileAlreadyExistsError, ProfileNotFoundError
from domain.entities.profile import Profile, UserRole, is_online
from domain.repositories.unit_of_work import IUnitOfWork


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        presence_window: timedelta = timedelta(minutes=5),
    ) -> None:
        self._uow_factory = uow_factory
        self._presence_window = presence_window

    @property
    def presence_window(self) -> timedelta:
        return self._presence_window

    async def get(self, user_id: UUID) -> Profile:
        """Get the profile for an auth user."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def create(
        self,
        user_id: UUID,
        full_name: str,
        role: UserRole,
        department: str | None = None,
    ) -> Profile:
        """Create the profile for a freshly registered user."""
        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_user_id(user_id):
                raise ProfileAlreadyExistsError(str(user_id))

            profile = Profile(
                user_id=user_id,
                full_name=full_name.strip(),
                role=role,
                department=department,
            )
            created = await uow.profiles.create(profile)
            await uow.commit()
            return created

    async def update_full_name(self, user_id: UUID, full_name: str) -> Profile:
        """Change the display name. Role and department cannot be edited."""
        full_name = full_name.strip()
        if not full_name:
            raise DomainValidationError("Full name must not be empty", details={"field": "full_name"})

        async with self._uow_factory() as uow:
            profile = await uow.profiles.update_full_name(user_id, full_name)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            await uow.commit()
            return profile

    async def heartbeat(self, user_id: UUID, now: datetime | None = None) -> datetime:
        """Refresh ``last_seen`` and return the recorded instant."""
        seen_at = now or datetime.utcnow()
        async with self._uow_factory() as uow:
            if not await uow.profiles.touch_last_seen(user_id, seen_at):
                raise ProfileNotFoundError(str(user_id))
            await uow.commit()
        return seen_at

    async def list_online(self, now: datetime | None = None) -> list[Profile]:
        """Profiles whose last heartbeat is within the presence window of ``now``."""
        now = now or datetime.utcnow()
        async with self._uow_factory() as uow:
            candidates = await uow.profiles.list_seen_since(now - self._presence_window)
        return [p for p in candidates if is_online(p.last_seen, now, self._presence_window)]
