"""Profile repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile linked to an auth user."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update_full_name(self, user_id: UUID, full_name: str) -> Profile | None:
        """Change a profile's display name. Returns None if no profile exists."""
        ...

    async def touch_last_seen(self, user_id: UUID, seen_at: datetime) -> bool:
        """Set last_seen for a user. Returns False if no profile exists."""
        ...

    async def list_seen_since(self, since: datetime) -> list[Profile]:
        """Get profiles whose last_seen is at or after ``since``."""
        ...
