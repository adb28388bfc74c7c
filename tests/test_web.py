import pytest
from fastapi.testclient import TestClient

from tablut.board import Board
from tablut.move import Move
from web.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_engine_replies_from_start(client):
    response = client.post("/api/move", json={"moves": []})
    assert response.status_code == 200
    body = response.json()
    move = Move.parse(body["move"])
    assert Board().is_legal_move(move)
    assert body["move_count"] == 1
    assert body["winner"] is None
    assert body["nodes"] > 1

    expected = Board()
    expected.apply_move(move)
    assert body["board"] == expected.render()


def test_engine_plays_for_defenders(client):
    response = client.post("/api/move", json={"moves": [" e2-c2 ", ""]})
    assert response.status_code == 200
    body = response.json()
    board = Board()
    board.apply_move(Move.parse("e2-c2"))
    assert board.is_legal_move(Move.parse(body["move"]))
    assert body["move_count"] == 2


def test_bad_notation(client):
    response = client.post("/api/move", json={"moves": ["e2-d3"]})
    assert response.status_code == 400
    assert "Invalid move 1" in response.json()["detail"]


def test_illegal_move(client):
    response = client.post("/api/move", json={"moves": ["e2-c2", "e2-e3"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Illegal move 2: e2-e3"


def test_finished_game(client):
    response = client.post("/api/move", json={"moves": ["e2-c2", "e4-c4", "c2-e2", "c4-e4"]})
    assert response.status_code == 400
    assert "already over" in response.json()["detail"]


def test_move_limit(client):
    response = client.post("/api/move", json={"moves": ["e2-c2", "e4-c4"], "move_limit": 1})
    assert response.status_code == 400
    assert "already over" in response.json()["detail"]

    response = client.post("/api/move", json={"moves": [], "move_limit": 0})
    assert response.status_code == 400
    assert "Invalid move limit" in response.json()["detail"]
