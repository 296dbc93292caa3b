"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from agent_council.main import REQUEST_ID_HEADER, app, get_service


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create(client, **overrides):
    body = {"action": "create_council", "name": "Arch Board", "topic": "API design", **overrides}
    response = client.post("/api/council", json=body)
    assert response.status_code == 200
    return response.json()["metadata"]["councilId"]


class TestHealth:
    """Tests for /api/health."""

    def test_health(self, client):
        """Health check reports the service name."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "Agent Council API"}


class TestActionEndpoint:
    """Tests for POST /api/council."""

    def test_success_envelope(self, client):
        """A successful action returns 200 and the envelope."""
        response = client.post(
            "/api/council",
            json={"action": "create_council", "name": "Board", "topic": "Hiring"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["metadata"]["success"] is True
        assert body["metadata"]["council"]["votingMethod"] == "majority"
        assert body["result"].startswith('Council "Board" created')

    def test_validation_error_is_400(self, client):
        """Validation failures map to 400."""
        response = client.post("/api/council", json={"action": "create_council", "topic": "T"})
        assert response.status_code == 400
        assert response.json()["metadata"] == {"success": False, "error": "MISSING_NAME"}

    def test_missing_action_is_400(self, client):
        """An empty body is a missing action."""
        response = client.post("/api/council", json={})
        assert response.status_code == 400
        assert response.json()["metadata"]["error"] == "MISSING_ACTION"

    def test_unknown_council_is_404(self, client):
        """An unknown council maps to 404."""
        response = client.post(
            "/api/council", json={"action": "vote", "councilId": "nope", "proposal": "P"}
        )
        assert response.status_code == 404
        assert response.json()["metadata"]["error"] == "COUNCIL_NOT_FOUND"

    def test_unknown_member_is_404(self, client):
        """An unknown member maps to 404."""
        council_id = _create(client)
        response = client.post(
            "/api/council",
            json={"action": "remove_member", "councilId": council_id, "memberName": "Ghost"},
        )
        assert response.status_code == 404
        assert response.json()["metadata"]["error"] == "MEMBER_NOT_FOUND"

    def test_full_flow(self, client):
        """Create, add members, and vote over HTTP."""
        council_id = _create(client, votingMethod="weighted")
        for member in (
            {"name": "Ana", "role": "analyst", "perspective": "data", "weight": 1},
            {"name": "Opt", "role": "optimist", "perspective": "growth", "weight": 2},
            {"name": "Crit", "role": "critic", "perspective": "risk", "weight": 1},
        ):
            response = client.post(
                "/api/council",
                json={"action": "add_member", "councilId": council_id, "member": member},
            )
            assert response.status_code == 200

        response = client.post(
            "/api/council",
            json={"action": "vote", "councilId": council_id, "proposal": "Adopt GraphQL"},
        )
        metadata = response.json()["metadata"]
        assert metadata["outcome"] == "approved"
        assert metadata["margin"] == 1


class TestReadEndpoints:
    """Tests for the GET council endpoints."""

    def test_list_empty(self, client):
        """Listing an empty store succeeds."""
        response = client.get("/api/councils")
        assert response.status_code == 200
        assert response.json()["metadata"]["count"] == 0

    def test_list_and_get(self, client):
        """A created council is listed and fetchable by id."""
        council_id = _create(client)
        listed = client.get("/api/councils").json()
        assert [c["id"] for c in listed["metadata"]["councils"]] == [council_id]

        response = client.get(f"/api/councils/{council_id}")
        assert response.status_code == 200
        assert response.json()["metadata"]["council"]["name"] == "Arch Board"

    def test_get_unknown_is_404(self, client):
        """Fetching an unknown council returns 404."""
        response = client.get("/api/councils/nope")
        assert response.status_code == 404


class TestRequestId:
    """Tests for the correlation ID header."""

    def test_echoes_supplied_id(self, client):
        """A caller-supplied request ID is echoed back."""
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "req-123"})
        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    def test_generates_id_when_absent(self, client):
        """A UUID request ID is generated when none is sent."""
        response = client.get("/api/health")
        assert len(response.headers[REQUEST_ID_HEADER]) == 36
