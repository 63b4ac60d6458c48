"""Role-scoped dashboard views composed over complaints and profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from core.exceptions import DomainValidationError
from domain.entities.complaint import Complaint, ComplaintStatus
from domain.entities.profile import Profile
from domain.entities.urgency import ScoreOrigin
from domain.services.complaint_service import ComplaintService
from domain.services.profile_service import ProfileService

WORKER_STATUSES = (ComplaintStatus.ONGOING, ComplaintStatus.CLOSED)


@dataclass
class CitizenDashboard:
    complaints: list[Complaint]
    counts: dict[ComplaintStatus, int]


@dataclass
class OfficerDashboard:
    complaints: list[Complaint]
    counts: dict[ComplaintStatus, int]
    online: list[Profile]
    poll_interval_seconds: int
    status_filter: ComplaintStatus | None = None

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass
class WorkerDashboard:
    complaints: list[Complaint]
    status_filter: ComplaintStatus
    in_progress: int = 0
    completed_today: int = 0
    fallback_scored: int = 0

    @property
    def assigned(self) -> int:
        return len(self.complaints)


class DashboardService:
    """Builds the citizen, officer and worker views."""

    def __init__(
        self,
        complaints: ComplaintService,
        profiles: ProfileService,
        poll_interval_seconds: int = 30,
    ) -> None:
        self._complaints = complaints
        self._profiles = profiles
        self._poll_interval_seconds = poll_interval_seconds

    async def citizen_view(self, user_id: UUID) -> CitizenDashboard:
        """The citizen's own complaints, newest first, with per-status counts."""
        complaints = await self._complaints.list_own(user_id)
        counts = {status: 0 for status in ComplaintStatus}
        for complaint in complaints:
            counts[complaint.status] += 1
        return CitizenDashboard(complaints=complaints, counts=counts)

    async def officer_view(
        self,
        status: ComplaintStatus | None = None,
        now: datetime | None = None,
    ) -> OfficerDashboard:
        """Every complaint (optionally one status), global counts and who is online."""
        complaints = await self._complaints.list_all(status)
        counts = await self._complaints.count_by_status()
        online = await self._profiles.list_online(now)
        return OfficerDashboard(
            complaints=complaints,
            counts=counts,
            online=online,
            poll_interval_seconds=self._poll_interval_seconds,
            status_filter=status,
        )

    async def worker_view(
        self,
        status: ComplaintStatus = ComplaintStatus.ONGOING,
        fallback_last: bool = False,
        now: datetime | None = None,
    ) -> WorkerDashboard:
        """Ongoing or closed complaints ranked by urgency.

        "Completed today" counts closed complaints whose last status change
        happened on the current UTC date.
        """
        if status not in WORKER_STATUSES:
            raise DomainValidationError(
                "Workers can only list ongoing or closed complaints",
                details={"status": status.value},
            )

        now = now or datetime.utcnow()
        complaints = await self._complaints.list_by_status(status, fallback_last=fallback_last)
        return WorkerDashboard(
            complaints=complaints,
            status_filter=status,
            in_progress=sum(1 for c in complaints if c.status == ComplaintStatus.ONGOING),
            completed_today=sum(
                1
                for c in complaints
                if c.status == ComplaintStatus.CLOSED and c.updated_at.date() == now.date()
            ),
            fallback_scored=sum(1 for c in complaints if c.score_origin == ScoreOrigin.FALLBACK),
        )
