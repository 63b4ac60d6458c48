"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID, uuid4


class UserRole(StrEnum):
    """Role chosen at registration. Never changes afterwards."""

    CITIZEN = "citizen"
    OFFICER = "officer"
    WORKER = "worker"


STAFF_ROLES = frozenset({UserRole.OFFICER, UserRole.WORKER})


def is_online(last_seen: datetime | None, now: datetime, window: timedelta) -> bool:
    """Return True if ``last_seen`` falls within ``window`` before ``now``."""
    if last_seen is None:
        return False
    return now - last_seen <= window


@dataclass
class Profile:
    """Domain entity for a user profile (one per Supabase auth user)."""

    user_id: UUID
    full_name: str
    role: UserRole = UserRole.CITIZEN
    id: UUID = field(default_factory=uuid4)
    department: str | None = None
    last_seen: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Drop the department for citizens and keep timestamps ordered."""
        if self.role not in STAFF_ROLES:
            self.department = None
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self, now: datetime | None = None) -> None:
        """Record a liveness heartbeat."""
        self.last_seen = now or datetime.utcnow()

    def is_online(self, now: datetime, window: timedelta) -> bool:
        return is_online(self.last_seen, now, window)
