"""Pydantic schemas for role-scoped dashboards."""

from pydantic import BaseModel

from api.v1.schemas.complaint import ComplaintResponse
from api.v1.schemas.profile import OnlineProfileResponse
from domain.entities.complaint import ComplaintStatus


class StatusCounts(BaseModel):
    pending: int = 0
    endorsed: int = 0
    ongoing: int = 0
    closed: int = 0


class CitizenDashboardResponse(BaseModel):
    complaints: list[ComplaintResponse]
    counts: StatusCounts


class OfficerDashboardResponse(BaseModel):
    complaints: list[ComplaintResponse]
    status_filter: ComplaintStatus | None = None
    total: int
    counts: StatusCounts
    online: list[OnlineProfileResponse]
    poll_interval_seconds: int


class WorkerStats(BaseModel):
    assigned: int
    in_progress: int
    completed_today: int
    fallback_scored: int


class WorkerDashboardResponse(BaseModel):
    complaints: list[ComplaintResponse]
    status_filter: ComplaintStatus
    stats: WorkerStats
