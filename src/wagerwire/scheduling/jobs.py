"""Scheduling entry points."""

from __future__ import annotations

import argparse
import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Dict

from sqlalchemy.orm import Session, sessionmaker

from wagerwire.config import get_settings
from wagerwire.data.schemas import BetRecordSchema
from wagerwire.data.score_client import ScoreClient
from wagerwire.db import ledger
from wagerwire.db.database import get_session, init_db
from wagerwire.simulation.loop import BettingSimulation

logger = logging.getLogger(__name__)

settings = get_settings()


def import_bets(path: Path, session_factory: sessionmaker[Session] | None = None) -> int:
    """Load a JSON array of bet feed records into the ledger."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    records = [BetRecordSchema.model_validate(item) for item in payload]
    with get_session(session_factory) as session:
        inserted = ledger.add_bet_records(session, records, settings.default_stake)
    logger.info("Imported %s of %s bet records from %s", inserted, len(records), path)
    return inserted


def run_simulation(
    simulation: BettingSimulation | None = None,
    max_cycles: int | None = None,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> Dict[str, int]:
    """Run update cycles until every bet is settled or ``max_cycles`` is reached."""

    simulation = simulation or BettingSimulation()
    simulation.load_queue()
    totals = {"cycles": 0, "placed": 0, "settled": 0, "errors": 0}
    while not simulation.is_idle:
        if max_cycles is not None and totals["cycles"] >= max_cycles:
            break
        summary = simulation.run_cycle()
        totals["cycles"] += 1
        totals["placed"] += summary["placed"]
        totals["settled"] += summary["settled"]
        totals["errors"] += summary["error"]
        if not simulation.is_idle:
            sleep_fn(simulation.settings.poll_interval_seconds)
    for character in simulation.characters.values():
        logger.info(
            "%s bankroll %.2f (net %.2f over %s bets)",
            character.name,
            character.bankroll,
            character.stats.net_profit,
            character.stats.total_bets,
        )
    return totals


def main() -> None:  # pragma: no cover - CLI convenience
    parser = argparse.ArgumentParser(description="Run the WagerWire settlement loop.")
    parser.add_argument("--import-bets", type=Path, help="JSON file of bet records to load first.")
    parser.add_argument("--max-cycles", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db()
    if args.import_bets:
        import_bets(args.import_bets)
    with ScoreClient() as client:
        run_simulation(BettingSimulation(score_client=client), max_cycles=args.max_cycles)


if __name__ == "__main__":  # pragma: no cover
    main()
