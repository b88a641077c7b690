"""Pydantic schemas for the WagerWire API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SettleRequest(BaseModel):
    selection_type: str = Field(examples=["Home Team", "Over"])
    line: float
    current_score: str = Field(examples=["2-1"])
    bet_time_score: str | None = None
    stake: float
    odds: float


class PredictRequest(BaseModel):
    selection_type: str
    line: float
    current_score: str
    bet_time_score: str | None = None


class Emotion(BaseModel):
    symbol: str
    label: str
    description: str = ""


class PredictResponse(BaseModel):
    outcome: str
    margin: float
    detail: str
    emotion: Emotion


class SettleResponse(PredictResponse):
    payout: float
    profit: float


class CharacterStatsResponse(BaseModel):
    character: str
    total_bets: int
    total_staked: float
    total_payout: float
    net_profit: float
    wins: int
    half_wins: int
    pushes: int
    half_losses: int
    losses: int
    win_rate: float
