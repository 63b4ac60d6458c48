"""Pydantic schemas for Complaint API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.common import ListMeta
from domain.entities.complaint import ComplaintCategory, ComplaintStatus, UrgencyLevel
from domain.entities.urgency import ScoreOrigin


class ComplaintCreate(BaseModel):
    """Schema for submitting a Complaint."""

    description: str = Field(..., min_length=1)
    category: ComplaintCategory = ComplaintCategory.WATER

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Description must not be blank")
        return value


class ComplaintStatusUpdate(BaseModel):
    """Schema for advancing a Complaint one step.

    `current_status` is the status the client last saw; the request is
    rejected if the complaint has moved on since.
    """

    current_status: ComplaintStatus
    status: ComplaintStatus


class ComplaintResponse(BaseModel):
    """Schema for Complaint response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "reporter_name": "Jane Doe",
                "description": "Water leaking on Main St",
                "category": "water",
                "status": "pending",
                "urgency_score": 0.8,
                "urgency_percent": 80,
                "urgency_level": "high",
                "score_origin": "assessed",
                "created_at": "2026-03-01T10:00:00",
                "updated_at": "2026-03-01T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    reporter_name: str | None = None
    description: str
    category: ComplaintCategory
    status: ComplaintStatus
    urgency_score: float
    urgency_percent: int
    urgency_level: UrgencyLevel
    score_origin: ScoreOrigin
    created_at: datetime
    updated_at: datetime


class ComplaintListResponse(BaseModel):
    """Schema for list of Complaints response."""

    data: list[ComplaintResponse]
    meta: ListMeta = Field(default_factory=ListMeta)


class ComplaintDetailResponse(BaseModel):
    """Schema for single Complaint response."""

    data: ComplaintResponse
