"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AsyncExitStack
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting and external scoring in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["MISTRAL_API_KEY"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.profile import Profile, UserRole
from domain.entities.session import AuthSession
from domain.entities.urgency import UrgencyAssessment
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one connection shared by every session)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeUrgencyScorer:
    """Scorer returning a preset assessment and recording what it was asked."""

    def __init__(self, assessment: UrgencyAssessment | None = None) -> None:
        self.assessment = assessment or UrgencyAssessment(score=0.8)
        self.calls: list[str] = []

    @property
    def is_configured(self) -> bool:
        return True

    async def score(self, description: str) -> UrgencyAssessment:
        self.calls.append(description)
        return self.assessment

    async def aclose(self) -> None:
        pass


class FakeIdentityGateway:
    """In-memory stand-in for Supabase Auth."""

    def __init__(self) -> None:
        self.users: dict[str, tuple[str, UUID]] = {}
        self.metadata: dict[UUID, dict[str, Any]] = {}
        self.revoked: list[str] = []

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> UUID:
        if email in self.users:
            raise AuthenticationError(
                message="User already registered", error_code=ErrorCode.INVALID_CREDENTIALS
            )
        user_id = uuid4()
        self.users[email] = (password, user_id)
        self.metadata[user_id] = metadata or {}
        return user_id

    async def sign_in(self, email: str, password: str) -> AuthSession:
        stored = self.users.get(email)
        if stored is None or stored[0] != password:
            raise AuthenticationError(
                message="Invalid email or password", error_code=ErrorCode.INVALID_CREDENTIALS
            )
        return AuthSession(
            user_id=stored[1],
            email=email,
            access_token=f"access-{stored[1]}",
            refresh_token=f"refresh-{stored[1]}",
            expires_in=3600,
        )

    async def sign_out(self, access_token: str) -> None:
        self.revoked.append(access_token)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def scorer() -> FakeUrgencyScorer:
    return FakeUrgencyScorer()


@pytest.fixture
def identity() -> FakeIdentityGateway:
    return FakeIdentityGateway()


@pytest.fixture
def seed_profile(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> Callable[..., Awaitable[Profile]]:
    """Insert a profile directly through the repository."""

    async def _seed(
        role: UserRole = UserRole.CITIZEN,
        full_name: str | None = None,
        department: str | None = None,
        last_seen: datetime | None = None,
    ) -> Profile:
        profile = Profile(
            user_id=uuid4(),
            full_name=full_name or f"Test {role.value.title()}",
            role=role,
            department=department,
            last_seen=last_seen,
        )
        async with uow_factory() as uow:
            created = await uow.profiles.create(profile)
            await uow.commit()
        return created

    return _seed


@pytest.fixture
async def citizen(seed_profile: Callable[..., Awaitable[Profile]]) -> Profile:
    return await seed_profile(UserRole.CITIZEN, full_name="Jane Citizen")


@pytest.fixture
async def officer(seed_profile: Callable[..., Awaitable[Profile]]) -> Profile:
    return await seed_profile(UserRole.OFFICER, full_name="Olu Officer", department="Water")


@pytest.fixture
async def worker(seed_profile: Callable[..., Awaitable[Profile]]) -> Profile:
    return await seed_profile(UserRole.WORKER, full_name="Wanjiru Worker", department="Roads")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def client_for(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    scorer: FakeUrgencyScorer,
    identity: FakeIdentityGateway,
) -> AsyncGenerator[Callable[[Profile | None], Awaitable[AsyncClient]], None]:
    """
    Build API clients bound to the test database.

    ``await client_for(profile)`` returns a client authenticated as that
    profile's user; ``await client_for(None)`` returns an anonymous client
    sharing the same services. Every client:
    - Uses the in-memory SQLite database
    - Scores urgency with FakeUrgencyScorer
    - Talks to FakeIdentityGateway instead of Supabase
    """
    from api.dependencies.auth import get_current_user
    from api.v1.dependencies import (
        get_auth_service,
        get_complaint_service,
        get_dashboard_service,
        get_profile_service,
    )
    from domain.services.auth_service import AuthService
    from domain.services.complaint_service import ComplaintService
    from domain.services.dashboard_service import DashboardService
    from domain.services.profile_service import ProfileService
    from main import create_app

    profiles = ProfileService(uow_factory)
    complaints = ComplaintService(uow_factory, scorer=scorer)
    dashboards = DashboardService(complaints, profiles, poll_interval_seconds=30)
    auth = AuthService(identity, profiles)

    async with AsyncExitStack() as stack:

        async def _build(profile: Profile | None) -> AsyncClient:
            app = create_app()
            app.dependency_overrides[get_profile_service] = lambda: profiles
            app.dependency_overrides[get_complaint_service] = lambda: complaints
            app.dependency_overrides[get_dashboard_service] = lambda: dashboards
            app.dependency_overrides[get_auth_service] = lambda: auth

            if profile is not None:
                user = TokenUser(
                    id=profile.user_id,
                    email=f"{profile.user_id}@example.com",
                    full_name=profile.full_name,
                )

                async def override_get_user() -> TokenUser:
                    return user

                app.dependency_overrides[get_current_user] = override_get_user

            transport = ASGITransport(app=app)
            return await stack.enter_async_context(
                AsyncClient(transport=transport, base_url="http://test")
            )

        yield _build
