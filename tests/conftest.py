"""Shared fixtures for WagerWire tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wagerwire.config import Settings
from wagerwire.data.schemas import EventSchema
from wagerwire.data.score_client import parse_event_payload
from wagerwire.db.database import init_db


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    """In-memory ledger shared across sessions of one test."""
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(starting_bankroll=1000.0, default_stake=100.0, characters=["Benny", "Max", "Ellie"])


class FakeScoreClient:
    """Serves canned event snapshots keyed by event id."""

    def __init__(self, events: dict[int, dict] | None = None) -> None:
        self.events = events or {}
        self.calls: list[int] = []

    def get_event(self, event_id: int) -> EventSchema | None:
        self.calls.append(event_id)
        return parse_event_payload(self.events.get(event_id))


@pytest.fixture
def score_client() -> FakeScoreClient:
    return FakeScoreClient()
