"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile, UserRole
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile linked to an auth user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_full_name(self, user_id: UUID, full_name: str) -> Profile | None:
        """Change a profile's display name. Role and department stay as registered."""
        model = await self._get_model(user_id)
        if not model:
            return None

        model.full_name = full_name
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def touch_last_seen(self, user_id: UUID, seen_at: datetime) -> bool:
        """Set last_seen for a user."""
        model = await self._get_model(user_id)
        if not model:
            return False

        model.last_seen = seen_at
        await self._session.flush()
        return True

    async def list_seen_since(self, since: datetime) -> list[Profile]:
        """Get profiles seen at or after ``since``, most recent first."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.last_seen.is_not(None), ProfileModel.last_seen >= since)
            .order_by(ProfileModel.last_seen.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            full_name=model.full_name,
            role=UserRole(model.role),
            department=model.department,
            last_seen=model.last_seen,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            full_name=entity.full_name,
            role=entity.role.value,
            department=entity.department,
            last_seen=entity.last_seen,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
