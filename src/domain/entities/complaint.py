"""Complaint domain entity and its status lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from core.exceptions import AuthorizationError, InvalidTransitionError
from domain.entities.profile import UserRole
from domain.entities.urgency import ScoreOrigin


class ComplaintCategory(StrEnum):
    """Fixed set of civic complaint categories."""

    WATER = "water"
    ELECTRICITY = "electricity"
    ROADS = "roads"
    SANITATION = "sanitation"
    OTHER = "other"


class ComplaintStatus(StrEnum):
    """Complaint lifecycle states, in the only order they may be visited."""

    PENDING = "pending"
    ENDORSED = "endorsed"
    ONGOING = "ongoing"
    CLOSED = "closed"


class UrgencyLevel(StrEnum):
    """Coarse urgency band used for display."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Legal (current, next) steps and the role allowed to take each one.
TRANSITIONS: dict[tuple[ComplaintStatus, ComplaintStatus], UserRole] = {
    (ComplaintStatus.PENDING, ComplaintStatus.ENDORSED): UserRole.OFFICER,
    (ComplaintStatus.ENDORSED, ComplaintStatus.ONGOING): UserRole.OFFICER,
    (ComplaintStatus.ONGOING, ComplaintStatus.CLOSED): UserRole.WORKER,
}

HIGH_URGENCY_THRESHOLD = 0.7
MEDIUM_URGENCY_THRESHOLD = 0.4


def next_status(current: ComplaintStatus) -> ComplaintStatus | None:
    """Return the single successor of a status, or None if it is terminal."""
    for source, target in TRANSITIONS:
        if source == current:
            return target
    return None


def advance(
    current: ComplaintStatus,
    requested: ComplaintStatus,
    role: UserRole | None = None,
) -> ComplaintStatus:
    """Validate a status change and return the new status.

    Only the legal successor pairs in ``TRANSITIONS`` are accepted. When
    ``role`` is given it must be the role that owns that step.

    Raises:
        InvalidTransitionError: If ``requested`` is not the successor of ``current``.
        AuthorizationError: If ``role`` may not perform the step.
    """
    allowed_role = TRANSITIONS.get((current, requested))
    if allowed_role is None:
        if current == ComplaintStatus.CLOSED:
            raise InvalidTransitionError(
                current.value, requested.value, message="Closed complaints cannot change status"
            )
        raise InvalidTransitionError(current.value, requested.value)
    if role is not None and role != allowed_role:
        raise AuthorizationError(
            f"Only a {allowed_role.value} may move a complaint "
            f"from '{current.value}' to '{requested.value}'"
        )
    return requested


@dataclass
class Complaint:
    """Domain entity for a citizen complaint."""

    user_id: UUID
    description: str
    category: ComplaintCategory
    urgency_score: float
    id: UUID = field(default_factory=uuid4)
    status: ComplaintStatus = ComplaintStatus.PENDING
    score_origin: ScoreOrigin = ScoreOrigin.ASSESSED
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    reporter_name: str | None = None

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def urgency_level(self) -> UrgencyLevel:
        if self.urgency_score >= HIGH_URGENCY_THRESHOLD:
            return UrgencyLevel.HIGH
        if self.urgency_score >= MEDIUM_URGENCY_THRESHOLD:
            return UrgencyLevel.MEDIUM
        return UrgencyLevel.LOW

    @property
    def urgency_percent(self) -> int:
        return round(self.urgency_score * 100)

    def transition_to(self, requested: ComplaintStatus, role: UserRole | None = None) -> None:
        """Advance the status one step. The urgency score is never touched."""
        self.status = advance(self.status, requested, role)
        self.updated_at = datetime.utcnow()
