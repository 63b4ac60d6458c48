"""Supabase access-token validation.

Supabase signs session tokens with ES256; public keys come from the project's
JWKS endpoint. HS256 with a shared secret is accepted for locally minted test
tokens.

Claims used:
    sub                       user UUID
    email                     account email
    user_metadata.full_name   name given at sign-up ("name" as a fallback)

The ``role`` claim is always ``authenticated`` and is ignored; citizen,
officer and worker roles live on the profile.
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

# kid -> JWK, filled on first ES256 token
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch the project's signing keys, cached after the first success."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=settings.supabase_timeout_seconds)
            response.raise_for_status()
            jwks_data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("jwks_fetch_failed", url=jwks_url, error=str(e))
        return {}

    _jwks_cache = {key["kid"]: key for key in jwks_data.get("keys", []) if key.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


def _user_from_claims(payload: dict[str, Any]) -> Optional[TokenUser]:
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None

    try:
        parsed_id = UUID(user_id)
    except ValueError:
        return None

    metadata = payload.get("user_metadata") or {}
    return TokenUser(
        id=parsed_id,
        email=email,
        full_name=metadata.get("full_name") or metadata.get("name"),
    )


class JWTAuthProvider:
    """Validates Supabase (ES256) and locally minted (HS256) access tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Decode and verify ``token``; None when invalid, expired or incomplete."""
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg", self._algorithm) == "ES256":
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None
        return _user_from_claims(payload)

    async def _validate_es256(self, token: str, header: dict) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if not key_data:
            # Unknown kid usually means rotated keys: refetch once
            global _jwks_cache
            _jwks_cache = None
            key_data = (await _get_jwks_keys()).get(kid)
            if not key_data:
                logger.warning("jwks_kid_unknown", kid=kid)
                return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Mint an HS256 token shaped like a Supabase session token."""
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
            "user_metadata": {"full_name": user.full_name},
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
