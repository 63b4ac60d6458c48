"""Schemas shared by every v1 route."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "INVALID_TRANSITION",
                "message": "Cannot move complaint from 'pending' to 'closed'",
                "details": {"current": "pending", "requested": "closed"},
            }
        }
    )

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    message: str


class ListMeta(BaseModel):
    """Totals that accompany a complaint listing."""

    total: int = 0
    fallback_scored: int = 0
