from __future__ import annotations

from fastapi.testclient import TestClient

from src.protocol.http.app import create_app
from src.protocol.http.settings import Settings


def _client() -> TestClient:
    return TestClient(create_app(Settings()))


def test_undo_without_moves_returns_400() -> None:
    client = _client()
    r = client.post("/api/games")
    game_id = r.json()["game_id"]

    r_undo = client.post(f"/api/games/{game_id}/undo")
    assert r_undo.status_code == 400
    body = r_undo.json()
    assert body["error"]["code"] == "bad_request"
    assert "no moves" in body["error"]["message"].lower()


def test_undo_restores_prior_state() -> None:
    client = _client()
    r = client.post("/api/games")
    game_id = r.json()["game_id"]
    start = r.json()["state"]

    r_move = client.post(
        f"/api/games/{game_id}/move", json={"from_square": "e2", "to_square": "e4"}
    )
    assert r_move.status_code == 200
    after = r_move.json()
    assert after["turn"] == "black"
    assert after["en_passant"] == "e3"

    r_undo = client.post(f"/api/games/{game_id}/undo")
    assert r_undo.status_code == 200
    state = r_undo.json()
    assert state["board"] == start["board"]
    assert state["turn"] == "white"
    assert state["en_passant"] is None
    assert state["last_move"] is None
    assert state["move_history"] == []
