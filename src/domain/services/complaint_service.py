"""Complaint service layer: submission, listing and guarded status changes."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    ComplaintNotFoundError,
    DomainValidationError,
    InvalidTransitionError,
)
from domain.entities.complaint import Complaint, ComplaintCategory, ComplaintStatus, advance
from domain.entities.profile import Profile, UserRole
from domain.gateways.urgency import IUrgencyScorer
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ComplaintService:
    """Service layer for Complaint business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        scorer: IUrgencyScorer,
    ) -> None:
        self._uow_factory = uow_factory
        self._scorer = scorer

    async def create(
        self,
        reporter: Profile,
        description: str,
        category: ComplaintCategory,
    ) -> Complaint:
        """Submit a new complaint.

        The description is scored exactly once, before the write. Scoring
        failures never block submission; they produce a fallback score.
        """
        if not description or not description.strip():
            raise DomainValidationError(
                "Description must not be empty", details={"field": "description"}
            )

        assessment = await self._scorer.score(description)

        complaint = Complaint(
            user_id=reporter.user_id,
            description=description,
            category=category,
            status=ComplaintStatus.PENDING,
            urgency_score=assessment.score,
            score_origin=assessment.origin,
            reporter_name=reporter.full_name,
        )

        async with self._uow_factory() as uow:
            created = await uow.complaints.create(complaint)
            await uow.commit()

        logger.info(
            "complaint_created",
            complaint_id=str(created.id),
            category=created.category.value,
            urgency_score=created.urgency_score,
            score_origin=created.score_origin.value,
        )
        return created

    async def get(self, complaint_id: UUID, viewer: Profile) -> Complaint:
        """Get one complaint. Citizens can only see their own."""
        async with self._uow_factory() as uow:
            complaint = await uow.complaints.get(complaint_id)

        if not complaint:
            raise ComplaintNotFoundError(str(complaint_id))
        if viewer.role == UserRole.CITIZEN and complaint.user_id != viewer.user_id:
            raise ComplaintNotFoundError(str(complaint_id))
        return complaint

    async def list_own(self, reporter_id: UUID) -> list[Complaint]:
        """All complaints filed by ``reporter_id``, newest first."""
        async with self._uow_factory() as uow:
            return await uow.complaints.list_for_user(reporter_id)  # type: ignore[no-any-return]

    async def list_all(self, status: ComplaintStatus | None = None) -> list[Complaint]:
        """All complaints, optionally restricted to one status, newest first."""
        async with self._uow_factory() as uow:
            return await uow.complaints.list_all(status)  # type: ignore[no-any-return]

    async def list_by_status(
        self, status: ComplaintStatus, fallback_last: bool = False
    ) -> list[Complaint]:
        """Complaints in exactly one status, most urgent first.

        With ``fallback_last`` complaints whose score is the neutral fallback
        are ranked after every assessed complaint.
        """
        async with self._uow_factory() as uow:
            return await uow.complaints.list_by_urgency(  # type: ignore[no-any-return]
                status, fallback_last=fallback_last
            )

    async def count_by_status(self, reporter_id: UUID | None = None) -> dict[ComplaintStatus, int]:
        async with self._uow_factory() as uow:
            return await uow.complaints.count_by_status(reporter_id)  # type: ignore[no-any-return]

    async def update_status(
        self,
        complaint_id: UUID,
        current: ComplaintStatus,
        requested: ComplaintStatus,
        actor: Profile,
    ) -> Complaint:
        """Move a complaint one step forward.

        ``current`` is the status the caller believes the complaint is in. If
        ``(current, requested)`` is a legal step for the actor and the
        complaint is already at ``requested``, the call is a no-op, so
        repeating a request leaves the record unchanged. If the stored status
        differs from ``current`` another actor got there first and the request
        is rejected.

        Raises:
            ComplaintNotFoundError: If the complaint does not exist.
            InvalidTransitionError: If the request is stale or not a legal step.
            AuthorizationError: If the actor's role may not take this step.
        """
        if actor.role == UserRole.CITIZEN:
            raise AuthorizationError("Citizens cannot change complaint status")

        async with self._uow_factory() as uow:
            complaint = await uow.complaints.get(complaint_id)
            if not complaint:
                raise ComplaintNotFoundError(str(complaint_id))

            # Pair and role are checked before the retry shortcut
            advance(current, requested, actor.role)
            if complaint.status == requested:
                return complaint

            if complaint.status != current:
                raise InvalidTransitionError(
                    complaint.status.value,
                    requested.value,
                    message=(
                        f"Complaint is '{complaint.status.value}', not '{current.value}'; "
                        "it was changed by someone else"
                    ),
                )

            previous = complaint.status
            complaint.transition_to(requested, actor.role)
            updated = await uow.complaints.update_status(complaint)
            await uow.commit()

        logger.info(
            "complaint_status_changed",
            complaint_id=str(complaint_id),
            from_status=previous.value,
            to_status=updated.status.value,
            actor_role=actor.role.value,
        )
        return updated
