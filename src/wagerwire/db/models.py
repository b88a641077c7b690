"""ORM models for the WagerWire bet ledger."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

BET_OPEN = "open"
BET_PLACED = "placed"
BET_SETTLED = "settled"


class Base(DeclarativeBase):
    """Base declarative class."""


class BetRecord(Base):
    """A single character's wager and, once known, its settlement."""

    __tablename__ = "bets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    character: Mapped[str] = mapped_column(String(64), nullable=False)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    stake: Mapped[float] = mapped_column(Float, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    selection_type: Mapped[str] = mapped_column(String(32), nullable=False)
    selection_line: Mapped[float] = mapped_column(Float, default=0.0)
    bet_time_score: Mapped[str | None] = mapped_column(String(16))
    status: Mapped[str] = mapped_column(String(16), default=BET_OPEN, index=True)
    result: Mapped[str | None] = mapped_column(String(128))
    payout: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    placed_at: Mapped[datetime | None] = mapped_column(DateTime)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime)
