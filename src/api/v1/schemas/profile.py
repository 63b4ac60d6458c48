"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import UserRole


class ProfileUpdate(BaseModel):
    """Only the display name is editable; role and department are fixed."""

    model_config = ConfigDict(extra="forbid")

    full_name: str = Field(..., min_length=1, max_length=255)


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    full_name: str
    role: UserRole
    department: str | None = None
    last_seen: datetime | None = None
    created_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile response."""

    data: ProfileResponse


class OnlineProfileResponse(BaseModel):
    """Entry in the presence roster."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    full_name: str
    role: UserRole
    last_seen: datetime | None


class OnlineProfilesResponse(BaseModel):
    """Presence roster with the polling cadence clients should use."""

    data: list[OnlineProfileResponse]
    window_minutes: int
    poll_interval_seconds: int


class HeartbeatResponse(BaseModel):
    last_seen: datetime
