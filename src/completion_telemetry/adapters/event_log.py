"""Leitura e escrita do log de eventos em JSON lines.

Responsabilidade:
- Converter cada linha em um evento tipado (união discriminada)
- Reportar linhas malformadas com número da linha
- Nunca corrigir eventos: o que está no log é o que o validador vê
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from completion_telemetry.domain.session.errors import EventLogError
from completion_telemetry.domain.session.events import CompletionEvent

_EVENT_ADAPTER: TypeAdapter[CompletionEvent] = TypeAdapter(CompletionEvent)


def decode_event(line: str, line_number: int | None = None) -> CompletionEvent:
    """Decodifica uma linha JSON em evento tipado.

    Raises:
        EventLogError: JSON inválido ou campos fora do contrato.
    """
    try:
        return _EVENT_ADAPTER.validate_json(line)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        detail = first.get("msg", "invalid event")
        location = ".".join(str(part) for part in first.get("loc", ()))
        if location:
            detail = f"{location}: {detail}"
        raise EventLogError(detail, line_number=line_number) from exc


def encode_event(event: CompletionEvent) -> str:
    """Serializa um evento em uma linha JSON compacta."""
    return event.model_dump_json()


def iter_events(lines: Iterable[str]) -> Iterator[CompletionEvent]:
    """Itera eventos decodificados, ignorando linhas em branco."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield decode_event(line, line_number=line_number)


def _decode_lines(raw_lines: Iterable[bytes]) -> Iterator[str]:
    for line_number, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EventLogError(
                f"invalid utf-8 at byte {exc.start}", line_number=line_number
            ) from exc


def read_event_log(path: str | Path) -> list[CompletionEvent]:
    """Lê um arquivo JSON lines inteiro.

    Raises:
        EventLogError: linha com bytes que não são utf-8 ou evento inválido.
    """
    with Path(path).open("rb") as handle:
        return list(iter_events(_decode_lines(handle)))
