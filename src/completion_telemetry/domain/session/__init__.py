"""Sessão de autocompletar: eventos, validade e validador.

Exporta:
- EventType / CompletionEvent: união fechada de 8 eventos
- ValidationState: VALID → INVALIDATED (mão única)
- SessionValidator: reducer sequencial de uma sessão
- SessionNotStartedError / EventLogError: erros fora do contrato
"""

from completion_telemetry.domain.session.errors import EventLogError, SessionNotStartedError
from completion_telemetry.domain.session.events import (
    TERMINAL_EVENT_TYPES,
    BackspaceEvent,
    CompletionEvent,
    DownPressedEvent,
    EventType,
    ExplicitSelectEvent,
    SessionCancelledEvent,
    SessionStartedEvent,
    TypedEvent,
    TypedSelectEvent,
    UpPressedEvent,
    is_terminal,
)
from completion_telemetry.domain.session.states import ValidationState
from completion_telemetry.domain.session.validator import Invalidation, SessionValidator

__all__ = [
    "EventType",
    "CompletionEvent",
    "TERMINAL_EVENT_TYPES",
    "SessionStartedEvent",
    "SessionCancelledEvent",
    "UpPressedEvent",
    "DownPressedEvent",
    "TypedEvent",
    "BackspaceEvent",
    "ExplicitSelectEvent",
    "TypedSelectEvent",
    "is_terminal",
    "ValidationState",
    "Invalidation",
    "SessionValidator",
    "SessionNotStartedError",
    "EventLogError",
]
