"""Identity provider protocol (password sign-in, sign-up, sign-out)."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.session import AuthSession


class IIdentityGateway(Protocol):
    """Protocol for the hosted password-based identity provider."""

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.

        Raises:
            AuthenticationError: If the credentials are rejected
            IdentityProviderError: On any other provider failure
        """
        ...

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> UUID:
        """
        Register a new identity and return its user ID.

        Raises:
            AuthenticationError: If the provider rejects the registration
            IdentityProviderError: On any other provider failure
        """
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        ...
