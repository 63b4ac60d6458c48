"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile, UserRole


class FakeUnitOfWork:
    """Fake Unit of Work with complaint and profile repository mocks."""

    def __init__(self) -> None:
        self.complaints = AsyncMock()
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def citizen_profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, full_name="Jane Citizen", role=UserRole.CITIZEN)


@pytest.fixture
def officer_profile() -> Profile:
    return Profile(user_id=uuid4(), full_name="Olu Officer", role=UserRole.OFFICER)


@pytest.fixture
def worker_profile() -> Profile:
    return Profile(user_id=uuid4(), full_name="Wanjiru Worker", role=UserRole.WORKER)
