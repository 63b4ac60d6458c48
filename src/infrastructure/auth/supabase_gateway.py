"""Supabase Auth (GoTrue) implementation of the identity gateway.

Endpoints used:
    POST {auth_url}/token?grant_type=password   -> session
    POST {auth_url}/signup                      -> user or session
    POST {auth_url}/logout                      -> 204
"""

import logging
from typing import Any
from uuid import UUID

import httpx

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode, IdentityProviderError
from domain.entities.session import AuthSession

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return str(body)
    return str(
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )


class SupabaseIdentityGateway:
    """Password auth against a Supabase project."""

    def __init__(
        self,
        auth_url: str = settings.supabase_auth_url,
        api_key: str = settings.supabase_anon_key,
        timeout: float = settings.supabase_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth_url = auth_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._auth_url,
            headers={"apikey": self._api_key},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if not self._auth_url:
            raise IdentityProviderError("Supabase URL is not configured")
        try:
            async with self._client() as client:
                return await client.post(path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.exception("Supabase auth request to %s failed", path)
            raise IdentityProviderError(f"Identity provider unreachable: {e}") from e

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Password grant. Rejected credentials raise AuthenticationError."""
        response = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

        if response.status_code in (400, 401, 422):
            message = _error_message(response)
            if "invalid login credentials" in message.lower():
                message = "Invalid email or password"
            raise AuthenticationError(message=message, error_code=ErrorCode.INVALID_CREDENTIALS)
        if response.is_error:
            raise IdentityProviderError(_error_message(response))

        return self._to_session(response.json())

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> UUID:
        """Register a new identity and return its user ID."""
        response = await self._post(
            "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )

        if response.status_code in (400, 422):
            raise AuthenticationError(
                message=_error_message(response), error_code=ErrorCode.INVALID_CREDENTIALS
            )
        if response.is_error:
            raise IdentityProviderError(_error_message(response))

        body = response.json()
        # With email confirmation enabled GoTrue returns the bare user object,
        # otherwise a session wrapping it.
        user = body.get("user") or body
        user_id = user.get("id")
        if not user_id:
            raise IdentityProviderError("Sign-up response did not include a user id")
        return UUID(user_id)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session. A token that is already invalid is not an error."""
        response = await self._post(
            "/logout",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code in (401, 403, 404):
            return
        if response.is_error:
            raise IdentityProviderError(_error_message(response))

    def _to_session(self, body: dict[str, Any]) -> AuthSession:
        user = body.get("user") or {}
        try:
            return AuthSession(
                user_id=UUID(user["id"]),
                email=user.get("email", ""),
                access_token=body["access_token"],
                refresh_token=body.get("refresh_token"),
                expires_in=body.get("expires_in"),
                token_type=body.get("token_type", "bearer"),
            )
        except (KeyError, ValueError) as e:
            raise IdentityProviderError("Malformed session returned by identity provider") from e
