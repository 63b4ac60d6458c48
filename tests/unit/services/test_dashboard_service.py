"""Unit tests for the role-scoped dashboard views."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from core.exceptions import DomainValidationError
from domain.entities.complaint import Complaint, ComplaintCategory, ComplaintStatus
from domain.entities.profile import Profile, UserRole
from domain.entities.urgency import ScoreOrigin
from domain.services.dashboard_service import DashboardService

NOW = datetime(2026, 3, 1, 15, 0, 0)


def _complaint(
    status: ComplaintStatus,
    score: float = 0.5,
    origin: ScoreOrigin = ScoreOrigin.ASSESSED,
    updated_at: datetime = NOW,
) -> Complaint:
    return Complaint(
        user_id=uuid4(),
        description="Blocked drain",
        category=ComplaintCategory.SANITATION,
        urgency_score=score,
        status=status,
        score_origin=origin,
        created_at=updated_at - timedelta(days=2),
        updated_at=updated_at,
    )


@pytest.fixture
def complaints() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def profiles() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(complaints: AsyncMock, profiles: AsyncMock) -> DashboardService:
    return DashboardService(complaints, profiles, poll_interval_seconds=30)


class TestCitizenView:
    async def test_counts_own_complaints_per_status(
        self, service: DashboardService, complaints: AsyncMock
    ) -> None:
        user_id = uuid4()
        complaints.list_own.return_value = [
            _complaint(ComplaintStatus.PENDING),
            _complaint(ComplaintStatus.PENDING),
            _complaint(ComplaintStatus.CLOSED),
        ]

        view = await service.citizen_view(user_id)

        assert len(view.complaints) == 3
        assert view.counts == {
            ComplaintStatus.PENDING: 2,
            ComplaintStatus.ENDORSED: 0,
            ComplaintStatus.ONGOING: 0,
            ComplaintStatus.CLOSED: 1,
        }
        complaints.list_own.assert_called_once_with(user_id)


class TestOfficerView:
    async def test_combines_complaints_counts_and_roster(
        self, service: DashboardService, complaints: AsyncMock, profiles: AsyncMock
    ) -> None:
        complaints.list_all.return_value = [_complaint(ComplaintStatus.ENDORSED)]
        complaints.count_by_status.return_value = {
            ComplaintStatus.PENDING: 4,
            ComplaintStatus.ENDORSED: 1,
            ComplaintStatus.ONGOING: 2,
            ComplaintStatus.CLOSED: 3,
        }
        profiles.list_online.return_value = [
            Profile(user_id=uuid4(), full_name="W", role=UserRole.WORKER, last_seen=NOW)
        ]

        view = await service.officer_view(ComplaintStatus.ENDORSED, now=NOW)

        assert view.total == 10
        assert view.status_filter == ComplaintStatus.ENDORSED
        assert len(view.online) == 1
        assert view.poll_interval_seconds == 30
        complaints.list_all.assert_called_once_with(ComplaintStatus.ENDORSED)
        profiles.list_online.assert_called_once_with(NOW)


class TestWorkerView:
    async def test_ongoing_queue_stats(
        self, service: DashboardService, complaints: AsyncMock
    ) -> None:
        complaints.list_by_status.return_value = [
            _complaint(ComplaintStatus.ONGOING, 0.9),
            _complaint(ComplaintStatus.ONGOING, 0.5, ScoreOrigin.FALLBACK),
        ]

        view = await service.worker_view(now=NOW)

        assert view.assigned == 2
        assert view.in_progress == 2
        assert view.completed_today == 0
        assert view.fallback_scored == 1
        complaints.list_by_status.assert_called_once_with(
            ComplaintStatus.ONGOING, fallback_last=False
        )

    async def test_completed_today_uses_last_status_change(
        self, service: DashboardService, complaints: AsyncMock
    ) -> None:
        complaints.list_by_status.return_value = [
            _complaint(ComplaintStatus.CLOSED, updated_at=NOW - timedelta(hours=3)),
            _complaint(ComplaintStatus.CLOSED, updated_at=NOW - timedelta(days=1)),
        ]

        view = await service.worker_view(ComplaintStatus.CLOSED, now=NOW)

        assert view.completed_today == 1
        assert view.in_progress == 0

    @pytest.mark.parametrize("status", [ComplaintStatus.PENDING, ComplaintStatus.ENDORSED])
    async def test_rejects_pre_work_statuses(
        self, service: DashboardService, complaints: AsyncMock, status: ComplaintStatus
    ) -> None:
        with pytest.raises(DomainValidationError):
            await service.worker_view(status)

        complaints.list_by_status.assert_not_called()
