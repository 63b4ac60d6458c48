"""Integration tests for Auth API."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from domain.entities.profile import Profile

ClientFor = Callable[[Profile | None], Awaitable[AsyncClient]]


async def _register(client: AsyncClient, **overrides: str):
    body = {
        "email": "olu@example.com",
        "password": "secret123",
        "full_name": "Olu Officer",
        "role": "officer",
        "department": "Water",
    }
    body.update(overrides)
    return await client.post("/api/v1/auth/register", json=body)


class TestRegister:
    async def test_creates_profile_with_fixed_role(self, client_for: ClientFor, identity) -> None:
        """Test POST /api/v1/auth/register."""
        response = await _register(await client_for(None))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["role"] == "officer"
        assert data["department"] == "Water"
        assert identity.metadata[next(iter(identity.metadata))] == {
            "full_name": "Olu Officer",
            "role": "officer",
        }

    async def test_citizen_department_is_dropped(self, client_for: ClientFor) -> None:
        response = await _register(
            await client_for(None), email="jane@example.com", role="citizen"
        )

        assert response.status_code == 201
        assert response.json()["data"]["department"] is None

    async def test_duplicate_email_rejected(self, client_for: ClientFor) -> None:
        client = await client_for(None)
        await _register(client)

        response = await _register(client)

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "overrides",
        [{"email": "not-an-email"}, {"password": "123"}, {"role": "mayor"}, {"full_name": ""}],
    )
    async def test_invalid_registration(self, client_for: ClientFor, overrides: dict) -> None:
        response = await _register(await client_for(None), **overrides)

        assert response.status_code == 422


class TestLogin:
    async def test_matching_role_returns_session_and_dashboard(
        self, client_for: ClientFor
    ) -> None:
        """Test POST /api/v1/auth/login."""
        client = await client_for(None)
        await _register(client)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "olu@example.com", "password": "secret123", "role": "officer"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["dashboard"] == "officer"
        assert body["session"]["access_token"].startswith("access-")
        assert body["profile"]["last_seen"] is not None

    async def test_role_mismatch_is_rejected_and_session_revoked(
        self, client_for: ClientFor, identity
    ) -> None:
        client = await client_for(None)
        await _register(client, email="w@example.com", role="worker", full_name="W")

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "w@example.com", "password": "secret123", "role": "officer"},
        )

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "ROLE_MISMATCH"
        assert body["message"] == "Invalid role. You are registered as a worker"
        assert len(identity.revoked) == 1

    async def test_wrong_password(self, client_for: ClientFor) -> None:
        client = await client_for(None)
        await _register(client)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "olu@example.com", "password": "nope", "role": "officer"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"


class TestLogout:
    async def test_revokes_bearer_token(self, client_for: ClientFor, identity) -> None:
        client = await client_for(None)

        response = await client.post(
            "/api/v1/auth/logout", headers={"Authorization": "Bearer some-token"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Signed out"}
        assert identity.revoked == ["some-token"]

    async def test_requires_token(self, client_for: ClientFor) -> None:
        response = await (await client_for(None)).post("/api/v1/auth/logout")

        assert response.status_code == 401
