"""Errors raised by the settlement core."""

from __future__ import annotations


class SettlementError(ValueError):
    """Base class for settlement failures."""


class InvalidSelection(SettlementError):
    """Selection type is not one of Home Team, Away Team, Over or Under."""


class InvalidScore(SettlementError):
    """Score text could not be parsed into two non-negative integers."""


class InvalidArgument(SettlementError):
    """Stake or odds are not positive finite numbers."""


class UnclassifiableMargin(SettlementError):
    """Margin landed outside the quarter-goal buckets."""

    def __init__(self, margin: float) -> None:
        super().__init__(f"Margin {margin} is not a multiple of 0.25")
        self.margin = margin
