"""Bet feed schema and score client tests."""

from __future__ import annotations

import httpx
import pytest

from wagerwire.data import schemas
from wagerwire.data.score_client import ScoreClient, ScoreFeedError
from wagerwire.settlement.types import ScoreSnapshot


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("£1,250", 1250.0), ("$40", 40.0), ("€ 25.5", 25.5), (50, 50.0), ("abc", 100.0), (None, 100.0), (0, 100.0), ("-5", 100.0)],
)
def test_parse_stake(raw: object, expected: float) -> None:
    assert schemas.parse_stake(raw, default=100.0) == expected  # type: ignore[arg-type]


def test_event_with_split_scores() -> None:
    event = schemas.EventSchema.model_validate({"status": "finished", "homeScore": 2, "awayScore": 1})
    assert event.is_finished
    assert not event.is_in_progress
    assert event.score_snapshot() == ScoreSnapshot(2, 1)


def test_event_with_score_string() -> None:
    event = schemas.EventSchema.model_validate({"status": "inprogress", "score": "1 - 0"})
    assert event.is_in_progress
    assert event.score_snapshot() == ScoreSnapshot(1, 0)


def test_event_missing_side_counts_as_zero() -> None:
    event = schemas.EventSchema.model_validate({"status": "finished", "homeScore": 3})
    assert event.score_snapshot() == ScoreSnapshot(3, 0)


def test_event_without_score_is_neither_finished_nor_live() -> None:
    event = schemas.EventSchema.model_validate({"status": "finished"})
    assert not event.is_finished
    assert not event.is_in_progress


def test_bet_record_accepts_upstream_field_names() -> None:
    record = schemas.BetRecordSchema.model_validate(
        {
            "id": 7,
            "character": "Ellie EV",
            "stake": "£200",
            "eventid": 12345,
            "price": 1.95,
            "recommendation": "Under",
            "selection_line": 2.25,
            "bet_time_score": "N/A",
        }
    )
    assert record.selection_combo == "Under"
    assert record.bet_time_score is None
    assert record.stake == "£200"


def test_bet_record_prefers_structured_selection() -> None:
    record = schemas.BetRecordSchema.model_validate(
        {"eventid": 1, "price": 2.0, "bet_selection": "Away Team", "selection_combo": "Arsenal +1"}
    )
    assert record.selection_combo == "Away Team"


def _client(handler) -> ScoreClient:
    return ScoreClient(base_url="https://scores.test/event", transport=httpx.MockTransport(handler))


def test_score_client_fetches_first_event() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["eventId"])
        return httpx.Response(200, json=[{"id": 42, "status": "finished", "homeScore": 0, "awayScore": 2}])

    with _client(handler) as client:
        event = client.get_event(42)
    assert seen == ["42"]
    assert event is not None
    assert event.id == 42
    assert event.score_snapshot() == ScoreSnapshot(0, 2)


def test_score_client_returns_none_for_empty_payload() -> None:
    with _client(lambda request: httpx.Response(200, json=[])) as client:
        assert client.get_event(1) is None


def test_score_client_accepts_bare_object() -> None:
    with _client(lambda request: httpx.Response(200, json={"status": "inprogress", "score": "1-1"})) as client:
        event = client.get_event(3)
    assert event is not None
    assert event.is_in_progress


def test_score_client_rejects_malformed_event() -> None:
    payload = [{"status": "finished", "homeScore": {"current": 2}, "awayScore": {"current": 1}}]
    with _client(lambda request: httpx.Response(200, json=payload)) as client:
        with pytest.raises(ScoreFeedError):
            client.get_event(5)


def test_score_client_rejects_non_json_body() -> None:
    with _client(lambda request: httpx.Response(200, text="<html>maintenance</html>")) as client:
        with pytest.raises(ScoreFeedError):
            client.get_event(6)
