"""Eventos de interação emitidos por uma sessão de autocompletar.

Cada sessão produz um fluxo linear de eventos tipados:
- SESSION_STARTED abre a sessão com a lista completa de candidatos
- TYPED / BACKSPACE estreitam ou ampliam a lista visível
- UP_PRESSED / DOWN_PRESSED movem o cursor
- EXPLICIT_SELECT / TYPED_SELECT / SESSION_CANCELLED encerram a sessão

Os modelos são contratos imutáveis; o validador nunca os altera.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class EventType(StrEnum):
    """8 Tipos canônicos de evento de sessão."""

    # === Abertura ===
    SESSION_STARTED = "SESSION_STARTED"
    """Popup exibido com a lista inicial de candidatos."""

    # === Navegação ===
    UP_PRESSED = "UP_PRESSED"
    """Cursor movido uma posição para cima (cíclico)."""

    DOWN_PRESSED = "DOWN_PRESSED"
    """Cursor movido uma posição para baixo (cíclico)."""

    # === Edição ===
    TYPED = "TYPED"
    """Usuário digitou; lista visível só pode estreitar."""

    BACKSPACE = "BACKSPACE"
    """Usuário apagou; lista visível pode ampliar."""

    # === Desfecho ===
    EXPLICIT_SELECT = "EXPLICIT_SELECT"
    """Candidato escolhido explicitamente (enter/clique)."""

    TYPED_SELECT = "TYPED_SELECT"
    """Candidato escolhido digitando seu texto completo."""

    SESSION_CANCELLED = "SESSION_CANCELLED"
    """Popup fechado sem seleção."""


TERMINAL_EVENT_TYPES = frozenset({
    EventType.SESSION_CANCELLED,
    EventType.EXPLICIT_SELECT,
    EventType.TYPED_SELECT,
})
"""Eventos que finalizam a sessão (nada mais é esperado depois deles)."""


class _SessionEventBase(BaseModel):
    """Campos comuns; session_id e event_id servem apenas para rastreio."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    session_id: str
    event_id: int = 0
    user_id: str | None = None


class SessionStartedEvent(_SessionEventBase):
    event_type: Literal["SESSION_STARTED"] = "SESSION_STARTED"
    item_ids: list[int] = Field(default_factory=list)
    language: str | None = None
    performed_experiment: bool = False
    experiment_version: int | None = None

    @property
    def item_count(self) -> int:
        return len(self.item_ids)


class SessionCancelledEvent(_SessionEventBase):
    event_type: Literal["SESSION_CANCELLED"] = "SESSION_CANCELLED"


class UpPressedEvent(_SessionEventBase):
    """Posição nova declarada pela UI; snapshots de lista são ignorados."""

    event_type: Literal["UP_PRESSED"] = "UP_PRESSED"
    new_position: int
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)


class DownPressedEvent(_SessionEventBase):
    """Posição nova declarada pela UI; snapshots de lista são ignorados."""

    event_type: Literal["DOWN_PRESSED"] = "DOWN_PRESSED"
    new_position: int
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)


class TypedEvent(_SessionEventBase):
    event_type: Literal["TYPED"] = "TYPED"
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)
    new_position: int = 0


class BackspaceEvent(_SessionEventBase):
    event_type: Literal["BACKSPACE"] = "BACKSPACE"
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)
    new_position: int = 0


class ExplicitSelectEvent(_SessionEventBase):
    event_type: Literal["EXPLICIT_SELECT"] = "EXPLICIT_SELECT"
    selected_position: int
    selected_id: int | None = None
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)


class TypedSelectEvent(_SessionEventBase):
    event_type: Literal["TYPED_SELECT"] = "TYPED_SELECT"
    selected_position: int
    selected_id: int | None = None
    visible_ids: list[int] = Field(default_factory=list)
    added_ids: list[int] = Field(default_factory=list)


CompletionEvent = Annotated[
    SessionStartedEvent
    | SessionCancelledEvent
    | UpPressedEvent
    | DownPressedEvent
    | TypedEvent
    | BackspaceEvent
    | ExplicitSelectEvent
    | TypedSelectEvent,
    Field(discriminator="event_type"),
]
"""União fechada de todos os eventos (discriminada por event_type)."""


def is_terminal(event: CompletionEvent) -> bool:
    """True se o evento encerra a sessão."""
    return event.event_type in TERMINAL_EVENT_TYPES
