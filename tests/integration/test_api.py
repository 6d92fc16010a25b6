"""Tests for the HTTP API envelope and routes."""

import httpx
import pytest

from nba_shotchart.api import create_app
from nba_shotchart.errors import TransportError
from nba_shotchart.services import ShotService

pytestmark = pytest.mark.integration


class BrokenStore:
    """Store double whose every call fails at the transport level."""

    async def fetch_shots(self, player_id, season, filters=None):
        raise TransportError("Failed to fetch shot data")

    async def fetch_player_name(self, player_id):
        raise TransportError("Failed to fetch player")

    async def list_players(self):
        raise TransportError("Failed to fetch players")

    async def list_teams(self):
        raise TransportError("Failed to fetch teams")

    async def list_seasons(self):
        raise TransportError("Failed to fetch seasons")


def _client(service: ShotService) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=create_app(service))
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def api(seeded_store):
    async with _client(ShotService(seeded_store)) as client:
        yield client


@pytest.fixture
async def broken_api():
    async with _client(ShotService(BrokenStore())) as client:
        yield client


class TestStatus:
    async def test_root(self, api):
        response = await api.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_trace_id_is_echoed(self, api):
        response = await api.get("/api/seasons", headers={"x-trace-id": "abc12345"})
        assert response.headers["x-trace-id"] == "abc12345"

        generated = await api.get("/api/seasons")
        assert len(generated.headers["x-trace-id"]) == 8


class TestShotRoutes:
    """Shots and statistics for one player and season."""

    async def test_player_shots(self, api):
        response = await api.get("/api/shots/player/201939/season/2023-24")
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert len(body["data"]) == 4
        first = body["data"][0]
        assert first["shotType"] == "2PT"
        assert first["gameDate"] == "2024-01-10"
        assert first["playerName"] == "Stephen Curry"

    async def test_shot_type_filter_is_repeatable(self, api):
        response = await api.get(
            "/api/shots/player/201939/season/2023-24",
            params={"shotTypes": ["3PT", "FT"]},
        )
        assert {s["shotType"] for s in response.json()["data"]} == {"3PT", "FT"}
        assert len(response.json()["data"]) == 3

    async def test_date_filters(self, api):
        response = await api.get(
            "/api/shots/player/201939/season/2023-24",
            params={"startDate": "2024-01-11", "endDate": "2024-02-02"},
        )
        assert [s["gameDate"] for s in response.json()["data"]] == ["2024-01-12", "2024-02-01"]

    async def test_player_stats(self, api):
        response = await api.get("/api/stats/player/201939/season/2023-24", params={"opponent": "BOS"})
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["playerName"] == "Stephen Curry"
        assert data["total"] == {"attempts": 3, "makes": 3, "percentage": 1.0}
        assert data["threePt"]["attempts"] == 1
        assert [z["name"] for z in data["zones"]][0] == "Restricted Area"

    async def test_unknown_player_stats_are_zero(self, api):
        data = (await api.get("/api/stats/player/999/season/2023-24")).json()["data"]
        assert data["playerName"] == "Unknown Player"
        assert data["total"]["attempts"] == 0


class TestBadRequests:
    """Malformed parameters map to 400 with the failure envelope."""

    async def test_unknown_shot_type(self, api):
        response = await api.get("/api/shots/player/201939/season/2023-24", params={"shotTypes": "4PT"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request parameters"}

    async def test_inverted_date_range(self, api):
        response = await api.get(
            "/api/stats/player/201939/season/2023-24",
            params={"startDate": "2024-03-01", "endDate": "2024-01-01"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_malformed_date(self, api):
        response = await api.get(
            "/api/shots/player/201939/season/2023-24", params={"startDate": "yesterday"}
        )
        assert response.status_code == 400


class TestUnknownRoutes:
    """Routing errors keep their status code and use the failure envelope."""

    async def test_unknown_path(self, api):
        response = await api.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    async def test_wrong_method(self, api):
        response = await api.post("/api/players")
        assert response.status_code == 405
        assert response.json() == {"success": False, "error": "Method Not Allowed"}
        assert response.headers["allow"] == "GET"


class TestReferenceRoutes:
    async def test_players(self, api):
        data = (await api.get("/api/players")).json()["data"]
        assert [p["name"] for p in data] == ["LeBron James", "Stephen Curry"]
        assert "teamId" in data[0]

    async def test_teams(self, api):
        data = (await api.get("/api/teams")).json()["data"]
        assert [t["abbreviation"] for t in data] == ["BOS", "LAL"]

    async def test_seasons(self, api):
        body = (await api.get("/api/seasons")).json()
        assert body == {"success": True, "data": ["2023-24", "2022-23"]}


class TestTransportFailures:
    """Store failures become 500 responses with a fixed error message."""

    @pytest.mark.parametrize(
        "path, error",
        [
            ("/api/shots/player/201939/season/2023-24", "Failed to fetch shot data"),
            ("/api/stats/player/201939/season/2023-24", "Failed to fetch shot statistics"),
            ("/api/players", "Failed to fetch players"),
            ("/api/teams", "Failed to fetch teams"),
            ("/api/seasons", "Failed to fetch seasons"),
        ],
    )
    async def test_failure_envelope(self, broken_api, path, error):
        response = await broken_api.get(path)
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": error}


class TestCompare:
    """Side-by-side comparison for up to three players."""

    async def test_failed_player_is_reported_alongside_others(self, seeded_store):
        class PartlyBrokenStore:
            async def fetch_shots(self, player_id, season, filters=None):
                if player_id == "2544":
                    raise TransportError("Failed to fetch shot data")
                return await seeded_store.fetch_shots(player_id, season, filters)

            async def fetch_player_name(self, player_id):
                return await seeded_store.fetch_player_name(player_id)

        async with _client(ShotService(PartlyBrokenStore())) as client:
            response = await client.get(
                "/api/compare/season/2023-24", params={"playerIds": ["201939", "2544"]}
            )

        body = response.json()
        assert response.status_code == 200
        players = body["data"]["players"]
        assert players["201939"]["stats"]["total"]["attempts"] == 4
        assert players["2544"]["error"] == "Failed to fetch shot data"
        assert [r["category"] for r in body["data"]["rows"]] == ["Overall", "2PT", "3PT"]
        assert all(r["playerId"] == "201939" for r in body["data"]["rows"])

    async def test_too_many_players(self, api):
        response = await api.get(
            "/api/compare/season/2023-24", params={"playerIds": ["1", "2", "3", "4"]}
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_zone_breakdown(self, api):
        response = await api.get(
            "/api/compare/season/2023-24", params={"playerIds": "201939", "kind": "zone"}
        )
        rows = response.json()["data"]["rows"]
        assert len(rows) == 5
        assert rows[0]["category"] == "Restricted Area"
