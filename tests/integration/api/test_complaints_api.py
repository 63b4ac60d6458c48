"""Integration tests for Complaints API."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from domain.entities.profile import Profile
from domain.entities.urgency import UrgencyAssessment

ClientFor = Callable[[Profile | None], Awaitable[AsyncClient]]


async def _submit(client: AsyncClient, description: str, category: str = "water") -> dict:
    response = await client.post(
        "/api/v1/complaints", json={"description": description, "category": category}
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _advance(client: AsyncClient, complaint_id: str, current: str, status: str):
    return await client.patch(
        f"/api/v1/complaints/{complaint_id}/status",
        json={"current_status": current, "status": status},
    )


class TestSubmitComplaint:
    async def test_citizen_submission_is_pending_and_scored_once(
        self, client_for: ClientFor, citizen: Profile, scorer
    ) -> None:
        """Test POST /api/v1/complaints."""
        client = await client_for(citizen)

        await _submit(client, "Streetlight flickering", "electricity")
        data = await _submit(client, "water leaking on Main St", "water")

        assert data["status"] == "pending"
        assert data["category"] == "water"
        assert data["urgency_score"] == 0.8
        assert data["urgency_level"] == "high"
        assert data["urgency_percent"] == 80
        assert data["score_origin"] == "assessed"
        assert data["reporter_name"] == "Jane Citizen"
        assert scorer.calls == ["Streetlight flickering", "water leaking on Main St"]

        mine = await client.get("/api/v1/complaints/mine")
        assert mine.status_code == 200
        assert mine.json()["data"][0]["id"] == data["id"]

    async def test_scoring_failure_still_records_complaint(
        self, client_for: ClientFor, citizen: Profile, scorer
    ) -> None:
        scorer.assessment = UrgencyAssessment.fallback()
        client = await client_for(citizen)

        data = await _submit(client, "Sewage overflow near the clinic", "sanitation")

        assert data["urgency_score"] == 0.5
        assert data["score_origin"] == "fallback"

    async def test_category_defaults_to_water(self, client_for: ClientFor, citizen: Profile) -> None:
        client = await client_for(citizen)

        response = await client.post("/api/v1/complaints", json={"description": "No supply"})

        assert response.status_code == 201
        assert response.json()["data"]["category"] == "water"

    @pytest.mark.parametrize(
        "body",
        [
            {"description": ""},
            {"description": "   "},
            {"description": "Leak", "category": "parking"},
            {"category": "roads"},
        ],
    )
    async def test_invalid_submission(
        self, client_for: ClientFor, citizen: Profile, body: dict
    ) -> None:
        client = await client_for(citizen)

        response = await client.post("/api/v1/complaints", json=body)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_requires_authentication(self, client_for: ClientFor) -> None:
        client = await client_for(None)

        response = await client.post("/api/v1/complaints", json={"description": "Leak"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"


class TestListAndGet:
    async def test_citizen_only_sees_own(
        self,
        client_for: ClientFor,
        citizen: Profile,
        seed_profile: Callable[..., Awaitable[Profile]],
    ) -> None:
        neighbour = await seed_profile(full_name="Neighbour")
        mine = await client_for(citizen)
        theirs = await client_for(neighbour)

        own = await _submit(mine, "Mine")
        other = await _submit(theirs, "Theirs")

        listing = (await mine.get("/api/v1/complaints/mine")).json()
        assert [c["id"] for c in listing["data"]] == [own["id"]]
        assert listing["meta"] == {"total": 1, "fallback_scored": 0}

        hidden = await mine.get(f"/api/v1/complaints/{other['id']}")
        assert hidden.status_code == 404
        assert hidden.json()["error_code"] == "COMPLAINT_NOT_FOUND"

    async def test_officer_lists_all(
        self, client_for: ClientFor, citizen: Profile, officer: Profile
    ) -> None:
        reporter = await client_for(citizen)
        await _submit(reporter, "One")
        await _submit(reporter, "Two")

        response = await (await client_for(officer)).get("/api/v1/complaints")

        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 2

    async def test_citizen_cannot_list_all(self, client_for: ClientFor, citizen: Profile) -> None:
        response = await (await client_for(citizen)).get("/api/v1/complaints")

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    async def test_unknown_complaint(self, client_for: ClientFor, officer: Profile) -> None:
        client = await client_for(officer)

        response = await client.get("/api/v1/complaints/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404


class TestStatusLifecycle:
    async def test_officer_endorsement_moves_between_filters(
        self, client_for: ClientFor, citizen: Profile, officer: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Pothole on Ring Rd", "roads")
        staff = await client_for(officer)

        response = await _advance(staff, complaint["id"], "pending", "endorsed")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "endorsed"
        assert response.json()["data"]["urgency_score"] == complaint["urgency_score"]

        pending = (await staff.get("/api/v1/complaints", params={"status": "pending"})).json()
        endorsed = (await staff.get("/api/v1/complaints", params={"status": "endorsed"})).json()
        assert complaint["id"] not in [c["id"] for c in pending["data"]]
        assert complaint["id"] in [c["id"] for c in endorsed["data"]]

    async def test_repeating_a_step_is_idempotent(
        self, client_for: ClientFor, citizen: Profile, officer: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Broken hydrant")
        staff = await client_for(officer)

        first = await _advance(staff, complaint["id"], "pending", "endorsed")
        second = await _advance(staff, complaint["id"], "pending", "endorsed")

        assert second.status_code == 200
        assert second.json()["data"] == first.json()["data"]

    async def test_worker_cannot_replay_officer_step(
        self, client_for: ClientFor, citizen: Profile, officer: Profile, worker: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Blocked drain")
        await _advance(await client_for(officer), complaint["id"], "pending", "endorsed")

        response = await _advance(await client_for(worker), complaint["id"], "pending", "endorsed")

        assert response.status_code == 403

    async def test_skipping_a_step_is_rejected(
        self, client_for: ClientFor, citizen: Profile, officer: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Burst main")

        response = await _advance(await client_for(officer), complaint["id"], "pending", "ongoing")

        assert response.status_code == 409
        assert response.json()["error_code"] == "INVALID_TRANSITION"

    async def test_stale_status_is_rejected(
        self, client_for: ClientFor, citizen: Profile, officer: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Fallen tree")
        staff = await client_for(officer)
        await _advance(staff, complaint["id"], "pending", "endorsed")
        await _advance(staff, complaint["id"], "endorsed", "ongoing")

        response = await _advance(staff, complaint["id"], "pending", "endorsed")

        assert response.status_code == 409

    async def test_only_workers_close(
        self, client_for: ClientFor, citizen: Profile, officer: Profile, worker: Profile
    ) -> None:
        complaint = await _submit(await client_for(citizen), "Exposed cable")
        staff = await client_for(officer)
        await _advance(staff, complaint["id"], "pending", "endorsed")
        await _advance(staff, complaint["id"], "endorsed", "ongoing")

        by_officer = await _advance(staff, complaint["id"], "ongoing", "closed")
        by_worker = await _advance(await client_for(worker), complaint["id"], "ongoing", "closed")

        assert by_officer.status_code == 403
        assert by_worker.status_code == 200
        assert by_worker.json()["data"]["status"] == "closed"

    async def test_citizen_cannot_change_status(
        self, client_for: ClientFor, citizen: Profile
    ) -> None:
        client = await client_for(citizen)
        complaint = await _submit(client, "Leak")

        response = await _advance(client, complaint["id"], "pending", "endorsed")

        assert response.status_code == 403

    async def test_closing_keeps_remaining_queue_ranked(
        self,
        client_for: ClientFor,
        citizen: Profile,
        officer: Profile,
        worker: Profile,
        scorer,
    ) -> None:
        """Test a worker closing the 0.9 complaint while a 0.3 one stays ongoing."""
        reporter = await client_for(citizen)
        staff = await client_for(officer)
        field = await client_for(worker)

        ids = {}
        for label, score in [("urgent", 0.9), ("mild", 0.3), ("middling", 0.6)]:
            scorer.assessment = UrgencyAssessment(score=score)
            ids[label] = (await _submit(reporter, label))["id"]
            await _advance(staff, ids[label], "pending", "endorsed")
            await _advance(staff, ids[label], "endorsed", "ongoing")

        queue = (await field.get("/api/v1/complaints/queue")).json()["data"]
        assert [c["description"] for c in queue] == ["urgent", "middling", "mild"]

        closed = await _advance(field, ids["urgent"], "ongoing", "closed")
        assert closed.status_code == 200

        ongoing = (await field.get("/api/v1/complaints/queue")).json()["data"]
        done = (await field.get("/api/v1/complaints/queue", params={"status": "closed"})).json()
        assert [c["description"] for c in ongoing] == ["middling", "mild"]
        assert [c["id"] for c in done["data"]] == [ids["urgent"]]
        scores = [c["urgency_score"] for c in ongoing]
        assert scores == sorted(scores, reverse=True)

    async def test_queue_rejects_pending_filter(self, client_for: ClientFor, worker: Profile) -> None:
        client = await client_for(worker)

        response = await client.get("/api/v1/complaints/queue", params={"status": "pending"})

        assert response.status_code == 422
