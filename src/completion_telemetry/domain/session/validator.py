"""Validador sequencial de sessões de autocompletar.

Reducer puro e síncrono sobre o fluxo de eventos de UMA sessão:
- Recalcula a posição esperada do cursor (aritmética cíclica) e compara
  com a posição declarada pela UI
- Digitação só pode estreitar a lista visível (salvo adições declaradas);
  backspace pode ampliá-la livremente
- Seleções devem coincidir com a última posição conhecida do cursor

Checagens que falham NUNCA lançam exceção: apenas invalidam a sessão,
de forma irreversível. O estado posicional continua sendo atualizado.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import assert_never

from pydantic import BaseModel, ConfigDict

from completion_telemetry.domain.session.errors import SessionNotStartedError
from completion_telemetry.domain.session.events import (
    BackspaceEvent,
    CompletionEvent,
    DownPressedEvent,
    ExplicitSelectEvent,
    SessionCancelledEvent,
    SessionStartedEvent,
    TypedEvent,
    TypedSelectEvent,
    UpPressedEvent,
    is_terminal,
)
from completion_telemetry.domain.session.states import (
    ValidationState,
    next_validation_state,
)

# Motivos de invalidação (estáveis; usados em relatórios e testes)
REASON_DUPLICATE_IDS = "duplicate_visible_ids"
REASON_UNEXPECTED_UP = "unexpected_up_position"
REASON_UNEXPECTED_DOWN = "unexpected_down_position"
REASON_LIST_WIDENED = "list_widened_on_typing"
REASON_POSITION_OUT_OF_RANGE = "position_out_of_range"
REASON_SELECTION_MISMATCH = "selection_position_mismatch"
REASON_SESSION_RESTARTED = "session_restarted"


class Invalidation(BaseModel):
    """Primeira inconsistência detectada na sessão (sem payload bruto)."""

    model_config = ConfigDict(frozen=True)

    event_id: int
    event_type: str
    reason: str


class SessionValidator:
    """Máquina de estados que decide, evento a evento, se a sessão é plausível.

    Uma instância por sessão; não é thread-safe nem precisa ser.
    """

    def __init__(self, started: SessionStartedEvent) -> None:
        if not isinstance(started, SessionStartedEvent):
            raise SessionNotStartedError(
                f"Validator requires SESSION_STARTED, got {type(started).__name__}"
            )

        self._session_id = started.session_id
        self._item_count = started.item_count
        self._current_position = 0
        self._visible_item_ids: tuple[int, ...] = tuple(started.item_ids)
        self._visible_set: frozenset[int] = frozenset(started.item_ids)
        self._state = ValidationState.VALID
        self._invalidation: Invalidation | None = None
        self._events_accepted = 1
        self._finalized = False

        self._check(started, not _has_duplicates(started.item_ids), REASON_DUPLICATE_IDS)

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------

    def accept(self, event: CompletionEvent) -> None:
        """Consome um evento, atualiza o estado e reavalia a validade."""
        match event:
            case SessionStartedEvent():
                # Reabertura no meio do fluxo: entrega duplicada ou intercalada
                self._check(event, False, REASON_SESSION_RESTARTED)
            case SessionCancelledEvent():
                pass
            case UpPressedEvent(new_position=new_position):
                expected = self._shifted_position(-1)
                self._check(event, new_position == expected, REASON_UNEXPECTED_UP)
                self._current_position = new_position
            case DownPressedEvent(new_position=new_position):
                expected = self._shifted_position(+1)
                self._check(event, new_position == expected, REASON_UNEXPECTED_DOWN)
                self._current_position = new_position
            case TypedEvent():
                self._check(
                    event,
                    self._only_narrows(event.visible_ids, event.added_ids),
                    REASON_LIST_WIDENED,
                )
                self._replace_visible(event, event.visible_ids, event.new_position)
            case BackspaceEvent():
                self._replace_visible(event, event.visible_ids, event.new_position)
            case ExplicitSelectEvent(selected_position=selected) | TypedSelectEvent(
                selected_position=selected
            ):
                self._check(
                    event, selected == self._current_position, REASON_SELECTION_MISMATCH
                )
            case _:
                assert_never(event)

        self._events_accepted += 1
        if is_terminal(event):
            self._finalized = True

    def accept_all(self, events: Iterable[CompletionEvent]) -> None:
        """Consome eventos na ordem do log."""
        for event in events:
            self.accept(event)

    def is_session_valid(self) -> bool:
        """Validade cumulativa até o último evento aceito."""
        return self._state is ValidationState.VALID

    # ------------------------------------------------------------------
    # Estado observável (somente leitura)
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def current_position(self) -> int:
        return self._current_position

    @property
    def visible_item_ids(self) -> tuple[int, ...]:
        return self._visible_item_ids

    @property
    def state(self) -> ValidationState:
        return self._state

    @property
    def invalidation(self) -> Invalidation | None:
        return self._invalidation

    @property
    def events_accepted(self) -> int:
        """Quantidade de eventos consumidos, incluindo SESSION_STARTED."""
        return self._events_accepted

    @property
    def is_finalized(self) -> bool:
        """True após cancelamento ou seleção."""
        return self._finalized

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _check(self, event: CompletionEvent, passed: bool, reason: str) -> None:
        """Aplica o resultado de uma checagem; guarda só a primeira falha."""
        self._state = next_validation_state(self._state, passed)
        if not passed and self._invalidation is None:
            self._invalidation = Invalidation(
                event_id=event.event_id,
                event_type=event.event_type,
                reason=reason,
            )

    def _shifted_position(self, delta: int) -> int | None:
        """Posição esperada após mover o cursor; None se não há candidatos."""
        if self._item_count <= 0:
            return None
        return (self._current_position + delta + self._item_count) % self._item_count

    def _only_narrows(self, visible_ids: Sequence[int], added_ids: Sequence[int]) -> bool:
        return set(visible_ids).difference(added_ids) <= self._visible_set

    def _replace_visible(
        self, event: CompletionEvent, visible_ids: Sequence[int], new_position: int
    ) -> None:
        self._check(event, not _has_duplicates(visible_ids), REASON_DUPLICATE_IDS)
        self._check(
            event, 0 <= new_position < self._item_count, REASON_POSITION_OUT_OF_RANGE
        )
        self._visible_item_ids = tuple(visible_ids)
        self._visible_set = frozenset(visible_ids)
        self._current_position = new_position


def _has_duplicates(ids: Sequence[int]) -> bool:
    return len(set(ids)) != len(ids)
