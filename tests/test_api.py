"""Tests for the REST API — the input layer and the state feed."""

import pytest
from fastapi.testclient import TestClient

from tilegame.api.app import create_app
from tilegame.api.session import GameSession
from tilegame.config import GameConfig


@pytest.fixture
def client():
    config = GameConfig(seed=7)
    app = create_app(session=GameSession.in_memory(config))
    with TestClient(app) as c:
        yield c


def _setup(client: TestClient, width: int = 5, height: int = 5) -> None:
    assert client.post("/api/v1/board", json={"width": width, "height": height}).status_code == 200
    assert client.post("/api/v1/players", json={"name": "Ann", "type": "girl", "x": 0, "y": 0}).status_code == 200


class TestBoard:
    def test_create_board(self, client):
        r = client.post("/api/v1/board", json={"width": 4, "height": 3})
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "board_ready"
        assert (body["width"], body["height"]) == (4, 3)

    def test_invalid_board_size(self, client):
        assert client.post("/api/v1/board", json={"width": 0, "height": 3}).status_code == 422

    def test_goodies_need_board(self, client):
        r = client.post("/api/v1/goodies", json={"count": 2})
        assert r.status_code == 409
        assert "BoardNotReady" in r.json()["detail"]

    def test_add_goodies(self, client):
        client.post("/api/v1/board", json={"width": 4, "height": 4})
        r = client.post("/api/v1/goodies", json={"count": 5, "visual": "apple"})
        body = r.json()
        assert body["requested"] == 5
        assert len(body["placed"]) == 5
        assert all(g["value"] == 40 for g in body["placed"])

    def test_recreate_board_after_players_conflicts(self, client):
        _setup(client)
        assert client.post("/api/v1/board", json={"width": 3, "height": 3}).status_code == 409


class TestPlayersAndMoves:
    def test_move_right(self, client):
        _setup(client)
        r = client.post("/api/v1/move/right")
        body = r.json()
        assert body["outcome"] == "moved"
        assert body["applied"] is True
        assert (body["player"]["x"], body["player"]["y"]) == (1, 0)
        assert body["player"]["health"] == 80
        assert body["player"]["direction"] == "right"

    def test_out_of_bounds_is_reported_not_raised(self, client):
        _setup(client)
        r = client.post("/api/v1/move/left")
        assert r.status_code == 200
        assert r.json()["outcome"] == "out_of_bounds"
        assert r.json()["applied"] is False
        assert r.json()["player"]["health"] == 100

    def test_move_to(self, client):
        _setup(client)
        r = client.post("/api/v1/move-to", json={"x": 0, "y": 1})
        assert r.json()["outcome"] == "moved"

    def test_unknown_direction(self, client):
        _setup(client)
        assert client.post("/api/v1/move/sideways").status_code == 422

    def test_set_active_player(self, client):
        _setup(client)
        client.post("/api/v1/players", json={"name": "Bob", "type": "boy", "x": 4, "y": 4})
        r = client.put("/api/v1/players/active/0")
        assert r.status_code == 200
        assert r.json()["name"] == "Ann"
        assert client.get("/api/v1/state").json()["active_index"] == 0

    def test_set_active_player_out_of_range(self, client):
        _setup(client)
        r = client.put("/api/v1/players/active/3")
        assert r.status_code == 404


class TestStateAndControl:
    def test_state(self, client):
        _setup(client)
        body = client.get("/api/v1/state").json()
        assert body["status"] == "in_progress"
        assert body["tilesize"] == 50
        assert [p["name"] for p in body["players"]] == ["Ann"]

    def test_events_since(self, client):
        _setup(client)
        events = client.get("/api/v1/events").json()
        assert [e["category"] for e in events] == ["board_created", "player_added"]
        last = events[-1]["seq"]
        client.post("/api/v1/move/down")
        newer = client.get("/api/v1/events", params={"since": last}).json()
        assert [e["category"] for e in newer] == ["player_moved"]

    def test_save_and_load(self, client):
        _setup(client)
        assert client.post("/api/v1/save").json()["status"] == "ok"
        client.post("/api/v1/move/right")
        r = client.post("/api/v1/load")
        assert r.json()["status"] == "ok"
        player = client.get("/api/v1/state").json()["players"][0]
        assert (player["x"], player["y"], player["health"]) == (0, 0, 100)

    def test_load_without_save_is_noop(self, client):
        _setup(client)
        assert client.post("/api/v1/load").json()["status"] == "noop"

    def test_reset(self, client):
        _setup(client)
        assert client.post("/api/v1/reset").json()["status"] == "ok"
        assert client.get("/api/v1/state").json()["status"] == "uninitialized"

    def test_config(self, client):
        body = client.get("/api/v1/config").json()
        assert body["move_energy"] == 20
        assert body["start_energy"] == 100
        assert body["seed"] == 7
