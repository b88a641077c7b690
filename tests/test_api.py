"""API tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from wagerwire.api import server
from wagerwire.db import ledger
from wagerwire.db.database import get_session
from wagerwire.data.schemas import BetRecordSchema


@pytest.fixture
def client(session_factory):
    def _db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    server.app.dependency_overrides[server.get_db] = _db
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_settle_half_win(client) -> None:
    response = client.post(
        "/settle",
        json={"selection_type": "Over", "line": 2.75, "current_score": "2-1", "stake": 100, "odds": 1.86},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["outcome"] == "Half Win"
    assert body["detail"] == "Over (2.75) (3 goals)"
    assert body["payout"] == pytest.approx(143.0)
    assert body["profit"] == pytest.approx(43.0)
    assert body["emotion"]["label"] == "relief"


def test_settle_rejects_unknown_selection(client) -> None:
    response = client.post(
        "/settle",
        json={"selection_type": "Arsenal", "line": 1, "current_score": "2-1", "stake": 100, "odds": 1.86},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidSelection"


def test_settle_rejects_bad_stake(client) -> None:
    response = client.post(
        "/settle",
        json={"selection_type": "Home", "line": 0, "current_score": "1-1", "stake": 0, "odds": 1.86},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidArgument"


def test_predict_in_progress(client) -> None:
    response = client.post(
        "/predict",
        json={"selection_type": "Home Team", "line": -0.5, "bet_time_score": "1-0", "current_score": "2-1"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["outcome"] == "Loss"
    assert body["emotion"]["label"] == "worried"


def test_character_stats_requires_api_key(client, monkeypatch) -> None:
    monkeypatch.setenv("WAGERWIRE_API_KEY", "secret")
    assert client.get("/characters/Max/stats").status_code == 401
    assert client.get("/characters/Max/stats", headers={"X-API-Key": "wrong"}).status_code == 401


def test_character_stats(client, session_factory, monkeypatch) -> None:
    monkeypatch.setenv("WAGERWIRE_API_KEY", "secret")
    with get_session(session_factory) as session:
        ledger.add_bet_records(
            session,
            [BetRecordSchema.model_validate({"id": 1, "character": "Max", "stake": 100, "eventid": 1, "price": 1.86, "selection_combo": "Over", "selection_line": 2.5})],
            default_stake=100.0,
        )
        ledger.record_settlement(session, 1, "Win - Over (2.5) (3 goals)", 186.0)

    response = client.get("/characters/Max/stats", headers={"X-API-Key": "secret"})
    assert response.status_code == 200
    body = response.json()
    assert body["wins"] == 1
    assert body["net_profit"] == pytest.approx(86.0)

    missing = client.get("/characters/Nobody/stats", headers={"X-API-Key": "secret"})
    assert missing.status_code == 404
