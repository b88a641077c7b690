"""FastAPI backend for WagerWire settlement."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wagerwire import __version__
from wagerwire.api.schemas import (
    CharacterStatsResponse,
    Emotion,
    PredictRequest,
    PredictResponse,
    SettleRequest,
    SettleResponse,
)
from wagerwire.config import get_api_access_key, get_settings
from wagerwire.db import ledger
from wagerwire.db.database import SessionLocal
from wagerwire.settlement.emotions import map_in_progress_emotion, map_settled_emotion
from wagerwire.settlement.engine import classify_outcome, parse_score, parse_selection_type, settle
from wagerwire.settlement.errors import SettlementError
from wagerwire.settlement.types import BetContext, BetSelection, Outcome

settings = get_settings()

app = FastAPI(
    title="WagerWire API",
    version=__version__,
    description="Asian Handicap and Over/Under settlement for the WagerWire simulation.",
)


@app.exception_handler(SettlementError)
async def settlement_error_handler(request: Request, exc: SettlementError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


SessionDep = Annotated[Session, Depends(get_db)]
APIKeyDep = Annotated[None, Depends(require_api_key)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, Any]:
    return {"name": "wagerwire-sim", "version": __version__}


def _prediction_fields(outcome: Outcome) -> dict[str, Any]:
    return {
        "outcome": outcome.outcome.value,
        "margin": outcome.margin,
        "detail": outcome.detail,
    }


@app.post("/settle", response_model=SettleResponse)
def settle_bet(payload: SettleRequest) -> SettleResponse:
    context = BetContext(
        selection=BetSelection(
            type=parse_selection_type(payload.selection_type),
            line=payload.line,
        ),
        current_score=parse_score(payload.current_score),
        bet_time_score=parse_score(payload.bet_time_score) if payload.bet_time_score else None,
    )
    result = settle(context, payload.stake, payload.odds)
    return SettleResponse(
        **_prediction_fields(result.outcome),
        emotion=Emotion(**asdict(map_settled_emotion(result.outcome))),
        payout=result.payout,
        profit=result.profit,
    )


@app.post("/predict", response_model=PredictResponse)
def predict(payload: PredictRequest) -> PredictResponse:
    prediction = classify_outcome(
        payload.selection_type,
        payload.line,
        payload.bet_time_score,
        payload.current_score,
    )
    return PredictResponse(
        **_prediction_fields(prediction),
        emotion=Emotion(**asdict(map_in_progress_emotion(prediction))),
    )


@app.get("/characters/{name}/stats", response_model=CharacterStatsResponse)
def character_stats(name: str, _: APIKeyDep, session: SessionDep) -> CharacterStatsResponse:
    if name not in settings.characters:
        raise HTTPException(status_code=404, detail=f"Unknown character: {name}")
    return CharacterStatsResponse(**ledger.character_stats(session, name))
