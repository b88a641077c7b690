"""Scheduling job tests."""

from __future__ import annotations

import json

import pytest

from wagerwire.scheduling import jobs
from wagerwire.simulation.loop import BettingSimulation


def test_import_then_run_until_settled(tmp_path, session_factory, settings, score_client) -> None:
    feed = tmp_path / "bets.json"
    feed.write_text(
        json.dumps(
            [
                {"id": 1, "character": "Benny Bankrupt", "stake": "£20", "eventid": 9, "price": 1.9, "recommendation": "Under", "selection_line": 2.5},
                {"id": 2, "character": "Max", "eventid": 9, "price": 2.1, "selection_combo": "Away Team", "selection_line": 0.25, "bet_time_score": "0-0"},
            ]
        ),
        encoding="utf-8",
    )
    assert jobs.import_bets(feed, session_factory=session_factory) == 2

    score_client.events = {9: {"status": "finished", "homeScore": 1, "awayScore": 1}}
    sim = BettingSimulation(score_client=score_client, session_factory=session_factory, settings=settings)
    sleeps: list[float] = []
    totals = jobs.run_simulation(sim, sleep_fn=sleeps.append)

    assert totals == {"cycles": 2, "placed": 2, "settled": 2, "errors": 0}
    assert sleeps == [settings.poll_interval_seconds]
    # Under 2.5 on 1-1 wins; Away +0.25 from 0-0 is a half win
    assert sim.characters["Benny"].bankroll == pytest.approx(1000 - 20 + 38)
    assert sim.characters["Max"].bankroll == pytest.approx(1000 - 100 + 155)


def test_run_simulation_stops_at_max_cycles(tmp_path, session_factory, settings, score_client) -> None:
    feed = tmp_path / "bets.json"
    feed.write_text(json.dumps([{"id": 5, "eventid": 77, "price": 1.5, "selection_combo": "Over", "selection_line": 1.5}]))
    jobs.import_bets(feed, session_factory=session_factory)

    score_client.events = {77: {"status": "inprogress", "score": "0-0"}}
    sim = BettingSimulation(score_client=score_client, session_factory=session_factory, settings=settings)
    totals = jobs.run_simulation(sim, max_cycles=3, sleep_fn=lambda _: None)

    assert totals["cycles"] == 3
    assert totals["settled"] == 0
    assert sim.characters["Benny"].state == "worried"
