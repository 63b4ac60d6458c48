"""Access-token validation contract."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Identity carried by a Supabase access token.

    Roles are not carried here; they are read from the profile row.
    """

    id: UUID
    email: str
    full_name: Optional[str] = None


class IAuthProvider(Protocol):
    """Turns a bearer token into a TokenUser."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None when the token is unusable."""
        ...
