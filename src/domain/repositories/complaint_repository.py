"""Complaint repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.complaint import Complaint, ComplaintStatus


class IComplaintRepository(Protocol):
    """Repository interface for Complaint entities."""

    async def get(self, id: UUID) -> Complaint | None:
        """Get a complaint by ID."""
        ...

    async def list_for_user(self, user_id: UUID) -> list[Complaint]:
        """Get a reporter's complaints, newest first."""
        ...

    async def list_all(self, status: ComplaintStatus | None = None) -> list[Complaint]:
        """Get all complaints, optionally in one status, newest first."""
        ...

    async def list_by_urgency(
        self, status: ComplaintStatus, fallback_last: bool = False
    ) -> list[Complaint]:
        """Get complaints in one status, most urgent first."""
        ...

    async def count_by_status(self, user_id: UUID | None = None) -> dict[ComplaintStatus, int]:
        """Count complaints per status, optionally for a single reporter."""
        ...

    async def create(self, complaint: Complaint) -> Complaint:
        """Create a new complaint."""
        ...

    async def update_status(self, complaint: Complaint) -> Complaint:
        """Persist the status (and updated_at) of an existing complaint."""
        ...
