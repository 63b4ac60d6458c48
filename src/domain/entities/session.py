"""Authenticated session returned by the identity provider."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class AuthSession:
    """Tokens and identity for a signed-in user."""

    user_id: UUID
    email: str
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
