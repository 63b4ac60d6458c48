"""Dependency injection factories for API v1."""

from datetime import timedelta
from functools import lru_cache
from typing import Callable

import httpx

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.complaint_service import ComplaintService
from domain.services.dashboard_service import DashboardService
from domain.services.profile_service import ProfileService
from infrastructure.auth.supabase_gateway import SupabaseIdentityGateway
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.scoring.mistral_scorer import MistralUrgencyScorer


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_urgency_scorer() -> MistralUrgencyScorer:
    """Get the urgency scorer with a shared HTTP client."""
    return MistralUrgencyScorer(client=httpx.AsyncClient())


@lru_cache
def get_identity_gateway() -> SupabaseIdentityGateway:
    """Get the Supabase Auth gateway."""
    return SupabaseIdentityGateway()


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        presence_window=timedelta(minutes=settings.presence_window_minutes),
    )


@lru_cache
def get_complaint_service() -> ComplaintService:
    """Get Complaint service instance."""
    return ComplaintService(get_uow_factory(), scorer=get_urgency_scorer())


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(get_identity_gateway(), get_profile_service())


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Get Dashboard service instance."""
    return DashboardService(
        get_complaint_service(),
        get_profile_service(),
        poll_interval_seconds=settings.presence_poll_seconds,
    )
