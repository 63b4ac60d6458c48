"""SQLAlchemy implementation of Complaint repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.complaint import Complaint, ComplaintCategory, ComplaintStatus
from domain.entities.urgency import ScoreOrigin
from infrastructure.database.models import ComplaintModel, ProfileModel


class SQLAlchemyComplaintRepository:
    """SQLAlchemy implementation of IComplaintRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select_with_reporter(self) -> Any:
        """Select complaints together with the reporter's full name."""
        return select(ComplaintModel, ProfileModel.full_name).outerjoin(
            ProfileModel, ProfileModel.user_id == ComplaintModel.user_id
        )

    async def get(self, id: UUID) -> Complaint | None:
        """Get a complaint by ID."""
        stmt = self._select_with_reporter().where(ComplaintModel.id == id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        return self._to_entity(row[0], row[1]) if row else None

    async def list_for_user(self, user_id: UUID) -> list[Complaint]:
        """Get a reporter's complaints, newest first."""
        stmt = (
            self._select_with_reporter()
            .where(ComplaintModel.user_id == user_id)
            .order_by(ComplaintModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model, name) for model, name in result]

    async def list_all(self, status: ComplaintStatus | None = None) -> list[Complaint]:
        """Get all complaints, optionally in one status, newest first."""
        stmt = self._select_with_reporter()
        if status is not None:
            stmt = stmt.where(ComplaintModel.status == status.value)
        stmt = stmt.order_by(ComplaintModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model, name) for model, name in result]

    async def list_by_urgency(
        self, status: ComplaintStatus, fallback_last: bool = False
    ) -> list[Complaint]:
        """Get complaints in one status, most urgent first (ties: oldest first)."""
        ordering = [ComplaintModel.urgency_score.desc(), ComplaintModel.created_at.asc()]
        if fallback_last:
            is_fallback = case(
                (ComplaintModel.score_origin == ScoreOrigin.FALLBACK.value, 1), else_=0
            )
            ordering.insert(0, is_fallback.asc())

        stmt = (
            self._select_with_reporter()
            .where(ComplaintModel.status == status.value)
            .order_by(*ordering)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model, name) for model, name in result]

    async def count_by_status(self, user_id: UUID | None = None) -> dict[ComplaintStatus, int]:
        """Count complaints per status. Statuses with no complaints map to 0."""
        stmt = select(ComplaintModel.status, func.count().label("total")).group_by(
            ComplaintModel.status
        )
        if user_id is not None:
            stmt = stmt.where(ComplaintModel.user_id == user_id)
        result = await self._session.execute(stmt)

        counts = {status: 0 for status in ComplaintStatus}
        for row in result:
            counts[ComplaintStatus(row.status)] = row.total
        return counts

    async def create(self, complaint: Complaint) -> Complaint:
        """Create a new complaint."""
        model = self._to_model(complaint)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model, complaint.reporter_name)

    async def update_status(self, complaint: Complaint) -> Complaint:
        """Persist the status of an existing complaint. Other columns are left alone."""
        stmt = select(ComplaintModel).where(ComplaintModel.id == complaint.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Complaint {complaint.id} not found")

        model.status = complaint.status.value
        model.updated_at = complaint.updated_at

        await self._session.flush()
        return self._to_entity(model, complaint.reporter_name)

    def _to_entity(self, model: ComplaintModel, reporter_name: str | None = None) -> Complaint:
        """Convert ORM model to domain entity."""
        return Complaint(
            id=model.id,
            user_id=model.user_id,
            description=model.description,
            category=ComplaintCategory(model.category),
            status=ComplaintStatus(model.status),
            urgency_score=model.urgency_score,
            score_origin=ScoreOrigin(model.score_origin),
            created_at=model.created_at,
            updated_at=model.updated_at,
            reporter_name=reporter_name,
        )

    def _to_model(self, entity: Complaint) -> ComplaintModel:
        """Convert domain entity to ORM model."""
        return ComplaintModel(
            id=entity.id,
            user_id=entity.user_id,
            description=entity.description,
            category=entity.category.value,
            status=entity.status.value,
            urgency_score=entity.urgency_score,
            score_origin=entity.score_origin.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
