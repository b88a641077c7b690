"""Database helpers for WagerWire."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from wagerwire.config import get_settings
from wagerwire.db.models import Base

settings = get_settings()
engine = create_engine(str(settings.database_url), future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)

__all__ = ["engine", "SessionLocal", "get_session", "init_db"]


def init_db(bind: Engine | None = None) -> None:
    """Create the ledger tables if they do not exist yet."""

    Base.metadata.create_all(bind or engine)


@contextmanager
def get_session(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
