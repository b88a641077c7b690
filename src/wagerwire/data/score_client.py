"""Thin client for the live match score proxy."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from wagerwire.config import get_settings
from wagerwire.data.schemas import EventSchema

logger = logging.getLogger(__name__)


class ScoreFeedError(RuntimeError):
    """The score source answered with something that is not an event snapshot."""


def parse_event_payload(payload: Any) -> EventSchema | None:
    """Validate a raw score source payload; a list yields its first event."""

    if isinstance(payload, list):
        if not payload:
            return None
        payload = payload[0]
    if not payload:
        return None
    try:
        return EventSchema.model_validate(payload)
    except ValidationError as exc:
        raise ScoreFeedError(f"Malformed event payload: {exc}") from exc


def _retry_log(retry_state: RetryCallState) -> None:  # pragma: no cover - logging helper
    attempt = retry_state.attempt_number
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Score API retry attempt %s due to %s", attempt, exception)


class ScoreClient:
    """Fetch event status and scores by event id."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.score_api_url
        self._client = httpx.Client(
            timeout=timeout or settings.score_api_timeout,
            transport=transport,
        )

    def __enter__(self) -> "ScoreClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        retry=retry_if_exception_type(httpx.HTTPError),
        after=_retry_log,
        reraise=True,
    )
    def _request(self, params: dict[str, Any]) -> Any:
        response = self._client.get(self.base_url, params=params)
        response.raise_for_status()
        return response.json()

    def get_event(self, event_id: int) -> EventSchema | None:
        """Return the latest snapshot for ``event_id`` or ``None`` when the source has nothing."""

        try:
            payload = self._request({"eventId": event_id})
        except ValueError as exc:
            raise ScoreFeedError(f"Event {event_id} response is not JSON") from exc
        return parse_event_payload(payload)
