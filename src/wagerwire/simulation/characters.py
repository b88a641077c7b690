"""Caller-owned character state for the betting simulation."""

from __future__ import annotations

from dataclasses import dataclass, field

from wagerwire.settlement.types import EmotionToken, OutcomeClass

READY = EmotionToken("😐", "neutral", "Ready to bet")
PLACING = EmotionToken("💰", "placing", "Placing bet")
WAITING_FOR_RESULT = EmotionToken("🤞", "waiting", "Waiting for result")
WAITING_FOR_KICKOFF = EmotionToken("⏳", "waiting", "Waiting for match to start")

# substrings seen in upstream display names, checked in order
_NAME_HINTS: list[tuple[str, tuple[str, ...]]] = [
    ("Max", ("Max", "Stacks")),
    ("Ellie", ("Ellie", "EV")),
    ("Benny", ("Benny", "Bankrupt")),
]

DEFAULT_CHARACTER = "Benny"


def resolve_character_name(raw: str | None) -> str:
    """Map a display name such as ``"Max Stacks"`` onto a simulation character."""

    if not raw:
        return DEFAULT_CHARACTER
    for name, hints in _NAME_HINTS:
        if any(hint in raw for hint in hints):
            return name
    return DEFAULT_CHARACTER


@dataclass
class CharacterStats:
    total_bets: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    total_staked: float = 0.0
    total_payout: float = 0.0

    @property
    def net_profit(self) -> float:
        return self.total_payout - self.total_staked

    def record(self, outcome: OutcomeClass, payout: float) -> None:
        self.total_payout += payout
        if outcome in (OutcomeClass.WIN, OutcomeClass.HALF_WIN):
            self.wins += 1
        elif outcome in (OutcomeClass.LOSS, OutcomeClass.HALF_LOSS):
            self.losses += 1
        else:
            self.pushes += 1


@dataclass
class Character:
    name: str
    bankroll: float
    state: str = "idle"
    emotion: EmotionToken = READY
    active_bets: list[int] = field(default_factory=list)
    stats: CharacterStats = field(default_factory=CharacterStats)

    def set_emotion(self, emotion: EmotionToken, state: str | None = None) -> None:
        self.emotion = emotion
        self.state = state or emotion.label


def create_character(name: str, bankroll: float) -> Character:
    return Character(name=name, bankroll=bankroll)
