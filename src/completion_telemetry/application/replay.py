"""Replay de sessões gravadas antes da admissão em analytics.

Fluxo:
1. Separar o log (possivelmente intercalado) por session_id
2. Abrir um SessionValidator por sessão a partir de SESSION_STARTED
3. Alimentar os demais eventos na ordem do log
4. Emitir um veredito por sessão (válida, finalizada, admitida)

Sessões são processadas sequencialmente; nada é reordenado ou deduplicado.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from completion_telemetry.config.settings import Settings, get_settings
from completion_telemetry.domain.session.errors import EventLogError, SessionNotStartedError
from completion_telemetry.domain.session.events import CompletionEvent, SessionStartedEvent
from completion_telemetry.domain.session.validator import Invalidation, SessionValidator
from completion_telemetry.observability.logging import bind_session_id, get_logger
from completion_telemetry.observability.timing import timed

logger: logging.Logger = get_logger(__name__)

REASON_TOO_MANY_EVENTS = "too_many_events"


class SessionVerdict(BaseModel):
    """Veredito de uma sessão reproduzida."""

    session_id: str
    valid: bool
    finalized: bool
    events_accepted: int
    invalidation: Invalidation | None = None
    admitted: bool = False


def replay_session(
    events: Sequence[CompletionEvent],
    settings: Settings | None = None,
) -> SessionVerdict:
    """Reproduz os eventos de UMA sessão e retorna o veredito.

    Raises:
        SessionNotStartedError: primeiro evento não é SESSION_STARTED.
        EventLogError: eventos de outra sessão misturados.
    """
    settings = settings or get_settings()

    if not events or not isinstance(events[0], SessionStartedEvent):
        raise SessionNotStartedError("Session log must open with SESSION_STARTED")

    started = events[0]
    with bind_session_id(started.session_id), timed("session_replay") as span:
        for event in events:
            if event.session_id != started.session_id:
                raise EventLogError(
                    f"event {event.event_id} belongs to session {event.session_id!r}, "
                    f"expected {started.session_id!r}"
                )

        span["events"] = len(events)
        if len(events) > settings.max_events_per_session:
            verdict = SessionVerdict(
                session_id=started.session_id,
                valid=False,
                finalized=False,
                events_accepted=0,
                invalidation=Invalidation(
                    event_id=started.event_id,
                    event_type=started.event_type,
                    reason=REASON_TOO_MANY_EVENTS,
                ),
            )
        else:
            validator = SessionValidator(started)
            validator.accept_all(events[1:])
            verdict = _build_verdict(validator, settings)

        _log_verdict(verdict, events_received=len(events))
        return verdict


def replay_event_log(
    events: Iterable[CompletionEvent],
    settings: Settings | None = None,
) -> list[SessionVerdict]:
    """Reproduz um log com várias sessões (ordem da primeira aparição).

    Raises:
        SessionNotStartedError: evento de sessão que nunca foi aberta.
    """
    settings = settings or get_settings()
    sessions: dict[str, list[CompletionEvent]] = {}

    for event in events:
        bucket = sessions.get(event.session_id)
        if bucket is None:
            if not isinstance(event, SessionStartedEvent):
                raise SessionNotStartedError(
                    f"Session {event.session_id!r} has events before SESSION_STARTED"
                )
            bucket = sessions[event.session_id] = []
        bucket.append(event)

    verdicts = [replay_session(bucket, settings) for bucket in sessions.values()]
    logger.info(
        "event_log_replayed",
        extra={"sessions": len(verdicts)},
    )
    return verdicts


def _build_verdict(validator: SessionValidator, settings: Settings) -> SessionVerdict:
    valid = validator.is_session_valid()
    finalized = validator.is_finalized
    return SessionVerdict(
        session_id=validator.session_id,
        valid=valid,
        finalized=finalized,
        events_accepted=validator.events_accepted,
        invalidation=validator.invalidation,
        admitted=valid and (finalized or settings.admit_unfinalized_sessions),
    )


def _log_verdict(verdict: SessionVerdict, events_received: int) -> None:
    """Um registro session_replayed por veredito (sem eventos brutos)."""
    logger.info(
        "session_replayed",
        extra={
            "valid": verdict.valid,
            "finalized": verdict.finalized,
            "admitted": verdict.admitted,
            "events_received": events_received,
            "events_accepted": verdict.events_accepted,
            "reason": verdict.invalidation.reason if verdict.invalidation else None,
        },
    )
