"""Pydantic schemas for bet records and live event payloads."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from wagerwire.settlement.engine import parse_score
from wagerwire.settlement.types import ScoreSnapshot

_CURRENCY_CHARS = re.compile(r"[£$€,]")

MISSING_SCORE_MARKERS = {"", "N/A"}


def parse_stake(value: str | float | int | None, default: float) -> float:
    """Read a stake such as ``"£1,250"``; unreadable or non-positive values use ``default``."""

    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else default
    try:
        stake = float(_CURRENCY_CHARS.sub("", value).strip())
    except ValueError:
        return default
    return stake if stake > 0 else default


class EventSchema(BaseModel):
    """Match snapshot returned by the live score source."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    status: str = "notstarted"
    home_score: int | None = Field(default=None, alias="homeScore")
    away_score: int | None = Field(default=None, alias="awayScore")
    score: str | None = None

    @property
    def has_score(self) -> bool:
        return bool(self.score) or self.home_score is not None

    @property
    def is_finished(self) -> bool:
        return self.status == "finished" and self.has_score

    @property
    def is_in_progress(self) -> bool:
        return self.status == "inprogress" and self.has_score

    def score_snapshot(self) -> ScoreSnapshot:
        """Current score; a missing side of a split score counts as zero."""

        if self.home_score is not None or self.away_score is not None:
            return ScoreSnapshot(home=self.home_score or 0, away=self.away_score or 0)
        if self.score:
            return parse_score(self.score)
        return ScoreSnapshot(home=0, away=0)


class BetRecordSchema(BaseModel):
    """A bet as exported by the upstream bet feed."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    created_at: datetime | None = None
    character: str = "Benny"
    stake: str | float | None = None
    eventid: int
    price: float = Field(gt=0)
    selection_combo: str = Field(
        validation_alias=AliasChoices("bet_selection", "Bet_Selection", "selection_combo", "recommendation"),
    )
    selection_line: float = 0.0
    bet_time_score: str | None = None

    @field_validator("bet_time_score", mode="before")
    @classmethod
    def _blank_score_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and value.strip() in MISSING_SCORE_MARKERS:
            return None
        return value
