"""Value types for bet settlement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SelectionType(str, Enum):
    HOME_TEAM = "Home Team"
    AWAY_TEAM = "Away Team"
    OVER = "Over"
    UNDER = "Under"

    @property
    def is_handicap(self) -> bool:
        return self in (SelectionType.HOME_TEAM, SelectionType.AWAY_TEAM)


class OutcomeClass(str, Enum):
    WIN = "Win"
    HALF_WIN = "Half Win"
    PUSH = "Push"
    HALF_LOSS = "Half Loss"
    LOSS = "Loss"


@dataclass(frozen=True)
class ScoreSnapshot:
    home: int
    away: int

    @property
    def total(self) -> int:
        return self.home + self.away

    def __str__(self) -> str:
        return f"{self.home}-{self.away}"


@dataclass(frozen=True)
class BetSelection:
    type: SelectionType
    line: float


@dataclass(frozen=True)
class BetContext:
    selection: BetSelection
    current_score: ScoreSnapshot
    bet_time_score: ScoreSnapshot | None = None


@dataclass(frozen=True)
class Outcome:
    """Classified result plus the margin it was derived from."""

    outcome: OutcomeClass
    margin: float
    detail: str = ""

    def __str__(self) -> str:
        if not self.detail:
            return self.outcome.value
        return f"{self.outcome.value} - {self.detail}"


@dataclass(frozen=True)
class SettlementResult:
    outcome: Outcome
    stake: float
    odds: float
    payout: float

    @property
    def profit(self) -> float:
        return self.payout - self.stake


@dataclass(frozen=True)
class EmotionToken:
    symbol: str
    label: str
    description: str = ""
