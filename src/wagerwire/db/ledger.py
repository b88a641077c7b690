"""Persistence operations on the bet ledger."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from wagerwire.data.schemas import BetRecordSchema, parse_stake
from wagerwire.db.models import BET_OPEN, BET_PLACED, BET_SETTLED, BetRecord
from wagerwire.settlement.engine import to_outcome_class
from wagerwire.settlement.errors import InvalidArgument
from wagerwire.settlement.types import OutcomeClass
from wagerwire.simulation.characters import resolve_character_name


def add_bet_records(session: Session, records: Iterable[BetRecordSchema], default_stake: float) -> int:
    """Insert feed records as open bets; existing ids are left untouched."""

    inserted = 0
    for record in records:
        if record.id is not None and session.get(BetRecord, record.id) is not None:
            continue
        row = BetRecord(
            character=resolve_character_name(record.character),
            event_id=record.eventid,
            stake=parse_stake(record.stake, default_stake),
            price=record.price,
            selection_type=record.selection_combo,
            selection_line=record.selection_line,
            bet_time_score=record.bet_time_score,
            status=BET_OPEN,
        )
        if record.id is not None:
            row.id = record.id
        if record.created_at is not None:
            row.created_at = record.created_at
        session.add(row)
        inserted += 1
    session.flush()
    return inserted


def load_open_bets(session: Session) -> list[BetRecord]:
    stmt = select(BetRecord).where(BetRecord.status == BET_OPEN).order_by(BetRecord.created_at, BetRecord.id)
    return list(session.scalars(stmt))


def load_placed_bets(session: Session) -> list[BetRecord]:
    stmt = select(BetRecord).where(BetRecord.status == BET_PLACED).order_by(BetRecord.placed_at, BetRecord.id)
    return list(session.scalars(stmt))


def _get_bet(session: Session, bet_id: int) -> BetRecord:
    bet = session.get(BetRecord, bet_id)
    if bet is None:
        raise LookupError(f"Bet {bet_id} does not exist")
    return bet


def mark_bet_placed(session: Session, bet_id: int, stake: float | None = None) -> BetRecord:
    bet = _get_bet(session, bet_id)
    bet.status = BET_PLACED
    bet.placed_at = datetime.utcnow()
    if stake is not None:
        bet.stake = stake
    return bet


def record_settlement(session: Session, bet_id: int, result: str, payout: float) -> BetRecord:
    bet = _get_bet(session, bet_id)
    bet.status = BET_SETTLED
    bet.result = result
    bet.payout = payout
    bet.settled_at = datetime.utcnow()
    return bet


def character_stats(session: Session, character: str) -> dict[str, Any]:
    """Aggregate settled bets for one character."""

    stmt = select(BetRecord).where(BetRecord.character == character, BetRecord.status == BET_SETTLED)
    counts = {outcome: 0 for outcome in OutcomeClass}
    total_staked = total_payout = 0.0
    rows = list(session.scalars(stmt))
    for row in rows:
        total_staked += row.stake or 0.0
        total_payout += row.payout or 0.0
        try:
            counts[to_outcome_class(row.result or "")] += 1
        except InvalidArgument:
            continue
    total = len(rows)
    wins = counts[OutcomeClass.WIN] + counts[OutcomeClass.HALF_WIN]
    return {
        "character": character,
        "total_bets": total,
        "total_staked": total_staked,
        "total_payout": total_payout,
        "net_profit": total_payout - total_staked,
        "wins": counts[OutcomeClass.WIN],
        "half_wins": counts[OutcomeClass.HALF_WIN],
        "pushes": counts[OutcomeClass.PUSH],
        "half_losses": counts[OutcomeClass.HALF_LOSS],
        "losses": counts[OutcomeClass.LOSS],
        "win_rate": round(wins / total * 100, 1) if total else 0.0,
    }
