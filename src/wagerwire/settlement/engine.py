"""Asian Handicap and Over/Under settlement.

Everything in this module is pure: no I/O, no logging, no shared state. Callers
own the bet lifecycle and decide what to do with the errors raised here.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from numbers import Real

from wagerwire.settlement.errors import (
    InvalidArgument,
    InvalidScore,
    InvalidSelection,
    UnclassifiableMargin,
)
from wagerwire.settlement.types import (
    BetContext,
    Outcome,
    OutcomeClass,
    ScoreSnapshot,
    SelectionType,
    SettlementResult,
)

ScoreInput = ScoreSnapshot | Sequence[int] | str

_SCORE_PATTERN = re.compile(r"(\d+)-(\d+)")

_SELECTION_ALIASES: dict[str, SelectionType] = {
    "home team": SelectionType.HOME_TEAM,
    "hometeam": SelectionType.HOME_TEAM,
    "home": SelectionType.HOME_TEAM,
    "away team": SelectionType.AWAY_TEAM,
    "awayteam": SelectionType.AWAY_TEAM,
    "away": SelectionType.AWAY_TEAM,
    "over": SelectionType.OVER,
    "under": SelectionType.UNDER,
}

_ZERO_SCORE = ScoreSnapshot(0, 0)


def parse_selection_type(value: SelectionType | str) -> SelectionType:
    """Resolve a selection type from the enum or one of its accepted spellings."""

    if isinstance(value, SelectionType):
        return value
    if isinstance(value, str):
        key = " ".join(value.split()).lower()
        if key in _SELECTION_ALIASES:
            return _SELECTION_ALIASES[key]
    raise InvalidSelection(f"Unrecognised selection type: {value!r}")


def parse_score(text: str) -> ScoreSnapshot:
    """Parse an "H-A" score string such as ``"2-1"`` or ``"5 - 0"``."""

    if not isinstance(text, str):
        raise InvalidScore(f"Score must be a string, got {type(text).__name__}")
    match = _SCORE_PATTERN.fullmatch(re.sub(r"\s", "", text))
    if not match:
        raise InvalidScore(f"Cannot parse score {text!r}")
    return ScoreSnapshot(home=int(match.group(1)), away=int(match.group(2)))


def _goal_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidScore(f"Goal count must be a number, got {value!r}")
    if not math.isfinite(value) or value != int(value) or value < 0:
        raise InvalidScore(f"Goal count must be a non-negative integer, got {value!r}")
    return int(value)


def to_score(value: ScoreInput) -> ScoreSnapshot:
    """Normalise a snapshot, ``(home, away)`` pair or score string."""

    if isinstance(value, str):
        return parse_score(value)
    if isinstance(value, ScoreSnapshot):
        home, away = value.home, value.away
    else:
        try:
            home, away = value
        except (TypeError, ValueError) as exc:
            raise InvalidScore(f"Cannot interpret {value!r} as a score") from exc
    return ScoreSnapshot(home=_goal_count(home), away=_goal_count(away))


def _format_line(line: float) -> str:
    return f"{line:g}"


def _classify_margin(margin: float) -> OutcomeClass:
    # goal counts are integers, so a quarter-multiple line keeps the margin on the 0.25 grid
    scaled = margin * 4
    if not math.isfinite(scaled) or scaled != int(scaled):
        raise UnclassifiableMargin(margin)
    if margin >= 0.5:
        return OutcomeClass.WIN
    if margin == 0.25:
        return OutcomeClass.HALF_WIN
    if margin == 0:
        return OutcomeClass.PUSH
    if margin == -0.25:
        return OutcomeClass.HALF_LOSS
    return OutcomeClass.LOSS


def classify_outcome(
    selection_type: SelectionType | str,
    line: float,
    bet_time_score: ScoreInput | None,
    current_score: ScoreInput,
) -> Outcome:
    """Classify a bet against a score.

    Handicap selections are measured on the goals scored since ``bet_time_score``
    (``None`` means kick-off, i.e. the full score). Totals always use the full
    current score regardless of when the bet was placed.

    Raises:
        InvalidSelection: unknown selection type.
        InvalidScore: a score cannot be read as two non-negative integers.
        UnclassifiableMargin: the line is not a multiple of 0.25.
    """

    selection = parse_selection_type(selection_type)
    if isinstance(line, bool) or not isinstance(line, Real) or not math.isfinite(line):
        raise UnclassifiableMargin(float("nan"))
    line = float(line)
    current = to_score(current_score)

    if selection.is_handicap:
        baseline = _ZERO_SCORE if bet_time_score is None else to_score(bet_time_score)
        adjusted_home = current.home - baseline.home
        adjusted_away = current.away - baseline.away
        if selection is SelectionType.HOME_TEAM:
            goal_diff = adjusted_home - adjusted_away
        else:
            goal_diff = adjusted_away - adjusted_home
        margin = round(goal_diff + line, 2)
        detail = f"{selection.value} ({_format_line(line)}) ({adjusted_home}-{adjusted_away})"
    else:
        total = current.total
        margin = round(total - line if selection is SelectionType.OVER else line - total, 2)
        detail = f"{selection.value} ({_format_line(line)}) ({total} goals)"

    return Outcome(outcome=_classify_margin(margin), margin=margin, detail=detail)


def to_outcome_class(outcome: Outcome | OutcomeClass | str) -> OutcomeClass:
    if isinstance(outcome, Outcome):
        return outcome.outcome
    if isinstance(outcome, OutcomeClass):
        return outcome
    if isinstance(outcome, str):
        # longest names first so "Half Win" is not read as "Win"
        for candidate in sorted(OutcomeClass, key=lambda c: len(c.value), reverse=True):
            if outcome.startswith(candidate.value):
                return candidate
    raise InvalidArgument(f"Unrecognised outcome: {outcome!r}")


def _positive_finite(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgument(f"{name} must be positive and finite, got {value!r}")
    return float(value)


def compute_payout(outcome: Outcome | OutcomeClass | str, stake: float, odds: float) -> float:
    """Return the amount handed back to the bettor, stake included."""

    result = to_outcome_class(outcome)
    stake = _positive_finite("stake", stake)
    odds = _positive_finite("odds", odds)

    if result is OutcomeClass.WIN:
        return stake * odds
    if result is OutcomeClass.HALF_WIN:
        return stake + stake * (odds - 1) * 0.5
    if result is OutcomeClass.PUSH:
        return stake
    if result is OutcomeClass.HALF_LOSS:
        return stake * 0.5
    return 0.0


def settle(context: BetContext, stake: float, odds: float) -> SettlementResult:
    outcome = classify_outcome(
        context.selection.type,
        context.selection.line,
        context.bet_time_score,
        context.current_score,
    )
    payout = compute_payout(outcome, stake, odds)
    return SettlementResult(outcome=outcome, stake=float(stake), odds=float(odds), payout=payout)
