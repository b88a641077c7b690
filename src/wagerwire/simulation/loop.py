"""Caller-owned update loop: place bets, follow live scores, settle."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from wagerwire.config import Settings, get_settings
from wagerwire.data.schemas import EventSchema
from wagerwire.data.score_client import ScoreClient, ScoreFeedError
from wagerwire.db import ledger
from wagerwire.db.database import get_session
from wagerwire.db.models import BetRecord
from wagerwire.settlement.emotions import map_in_progress_emotion, map_settled_emotion
from wagerwire.settlement.engine import classify_outcome, compute_payout
from wagerwire.settlement.errors import SettlementError
from wagerwire.settlement.types import Outcome, SettlementResult
from wagerwire.simulation.characters import (
    PLACING,
    READY,
    WAITING_FOR_KICKOFF,
    WAITING_FOR_RESULT,
    Character,
    create_character,
    resolve_character_name,
)

logger = logging.getLogger(__name__)

STATUS_SETTLED = "settled"
STATUS_IN_PROGRESS = "in_progress"
STATUS_WAITING = "waiting"
STATUS_MISSING = "missing"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class ActiveBet:
    """Detached copy of a ledger row so the loop never holds a session open."""

    id: int
    character: str
    event_id: int
    stake: float
    price: float
    selection_type: str
    selection_line: float
    bet_time_score: str | None = None

    @classmethod
    def from_record(cls, record: BetRecord) -> "ActiveBet":
        return cls(
            id=record.id,
            character=resolve_character_name(record.character),
            event_id=record.event_id,
            stake=record.stake,
            price=record.price,
            selection_type=record.selection_type,
            selection_line=record.selection_line,
            bet_time_score=record.bet_time_score,
        )


class BettingSimulation:
    """Owns every piece of mutable simulation state; the settlement core owns none."""

    def __init__(
        self,
        score_client: ScoreClient | None = None,
        session_factory: sessionmaker[Session] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.score_client = score_client or ScoreClient()
        self.session_factory = session_factory
        self.characters: dict[str, Character] = {}
        self.queue: deque[ActiveBet] = deque()
        self.active_bets: dict[int, ActiveBet] = {}
        self.reset()

    def reset(self) -> None:
        self.characters = {
            name: create_character(name, self.settings.starting_bankroll)
            for name in self.settings.characters
        }
        self.queue.clear()
        self.active_bets.clear()

    def load_queue(self) -> int:
        """Queue open ledger bets and resume bets that were placed in an earlier run."""

        with get_session(self.session_factory) as session:
            open_bets = [ActiveBet.from_record(row) for row in ledger.load_open_bets(session)]
            placed = [ActiveBet.from_record(row) for row in ledger.load_placed_bets(session)]
        known = {bet.id for bet in self.queue} | set(self.active_bets)
        queued = [bet for bet in open_bets if bet.id not in known]
        self.queue.extend(queued)
        resumed = 0
        for bet in placed:
            character = self.characters.get(bet.character)
            if character is None or bet.id in known:
                continue
            self._take_stake(character, bet)
            character.set_emotion(WAITING_FOR_RESULT)
            resumed += 1
        logger.info("Loaded %s open bets, resumed %s placed bets", len(queued), resumed)
        return len(queued)

    def next_queued_bet(self) -> ActiveBet | None:
        if not self.queue:
            logger.info("All queued bets have been processed")
            return None
        return self.queue.popleft()

    def _take_stake(self, character: Character, bet: ActiveBet) -> None:
        character.bankroll -= bet.stake
        character.stats.total_staked += bet.stake
        character.stats.total_bets += 1
        character.active_bets.append(bet.id)
        self.active_bets[bet.id] = bet

    def place_bet(self, bet: ActiveBet) -> bool:
        character = self.characters.get(bet.character)
        if character is None:
            logger.error("Unknown character %s for bet %s", bet.character, bet.id)
            return False
        character.set_emotion(PLACING, "placing_bet")
        try:
            with get_session(self.session_factory) as session:
                ledger.mark_bet_placed(session, bet.id, bet.stake)
        except LookupError as exc:
            logger.error("Dropping bet %s: %s", bet.id, exc)
            character.set_emotion(READY, "idle")
            return False
        except SQLAlchemyError as exc:
            logger.error("Could not place bet %s, will retry: %s", bet.id, exc)
            self.queue.appendleft(bet)
            character.set_emotion(READY, "idle")
            return False
        # bankroll only moves once the ledger has committed
        self._take_stake(character, bet)
        logger.info(
            "%s placed bet %s of %.2f on %s %s",
            character.name,
            bet.id,
            bet.stake,
            bet.selection_type,
            bet.selection_line,
        )
        character.set_emotion(WAITING_FOR_RESULT)
        return True

    def _classify(self, bet: ActiveBet, event: EventSchema) -> Outcome:
        return classify_outcome(
            bet.selection_type,
            bet.selection_line,
            bet.bet_time_score,
            event.score_snapshot(),
        )

    def settle_bet(self, bet: ActiveBet, event: EventSchema) -> SettlementResult:
        outcome = self._classify(bet, event)
        payout = compute_payout(outcome, bet.stake, bet.price)
        character = self.characters[bet.character]
        with get_session(self.session_factory) as session:
            ledger.record_settlement(session, bet.id, str(outcome), payout)
        character.bankroll += payout
        character.stats.record(outcome.outcome, payout)
        character.set_emotion(map_settled_emotion(outcome))
        self.active_bets.pop(bet.id, None)
        if bet.id in character.active_bets:
            character.active_bets.remove(bet.id)
        logger.info("%s bet %s settled: %s, payout %.2f", character.name, bet.id, outcome, payout)
        return SettlementResult(outcome=outcome, stake=bet.stake, odds=bet.price, payout=payout)

    def update_in_progress(self, bet: ActiveBet, event: EventSchema) -> Outcome:
        prediction = self._classify(bet, event)
        self.characters[bet.character].set_emotion(map_in_progress_emotion(prediction))
        logger.info("Bet %s in progress: %s", bet.id, prediction)
        return prediction

    def check_bet(self, bet: ActiveBet) -> str:
        event = self.score_client.get_event(bet.event_id)
        if event is None:
            logger.warning("No event data for event %s", bet.event_id)
            return STATUS_MISSING
        if event.is_finished:
            self.settle_bet(bet, event)
            return STATUS_SETTLED
        if event.is_in_progress:
            self.update_in_progress(bet, event)
            return STATUS_IN_PROGRESS
        self.characters[bet.character].set_emotion(WAITING_FOR_KICKOFF)
        return STATUS_WAITING

    def check_active_bets(self) -> dict[str, int]:
        summary = {
            STATUS_SETTLED: 0,
            STATUS_IN_PROGRESS: 0,
            STATUS_WAITING: 0,
            STATUS_MISSING: 0,
            STATUS_ERROR: 0,
        }
        for bet in list(self.active_bets.values()):
            try:
                status = self.check_bet(bet)
            except (SettlementError, ScoreFeedError, httpx.HTTPError, SQLAlchemyError) as exc:
                logger.error("Error checking bet %s: %s", bet.id, exc)
                status = STATUS_ERROR
            summary[status] += 1
        return summary

    def run_cycle(self) -> dict[str, int]:
        """Feed the next queued bet, then refresh every active one."""

        placed = 0
        bet = self.next_queued_bet()
        if bet is not None and self.place_bet(bet):
            placed = 1
        summary = self.check_active_bets()
        summary["placed"] = placed
        return summary

    @property
    def is_idle(self) -> bool:
        return not self.queue and not self.active_bets
