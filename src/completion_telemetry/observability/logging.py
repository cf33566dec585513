"""Configuração de logging estruturado (JSON)."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Generator
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

_session_id: ContextVar[str] = ContextVar("session_id", default="")

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s %(session_id)s %(service)s"


def get_session_id() -> str:
    """Retorna o session_id corrente (ou vazio)."""

    return _session_id.get()


@contextlib.contextmanager
def bind_session_id(session_id: str) -> Generator[None, None, None]:
    """Associa session_id a todos os logs emitidos dentro do bloco."""

    token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Insere session_id e service no record de log.

    Importante: nunca adicionar eventos brutos nos logs.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        # Preserve session_id passed explicitly via `extra` when present.
        existing = getattr(record, "session_id", None)
        record.session_id = existing if existing else get_session_id()
        record.service = self._service_name
        return True


def configure_logging(level: str, service_name: str, log_format: str = "json") -> None:
    """Configura logging (JSON ou texto) com campos padrão do serviço."""

    if log_format == "text":
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(session_id)s] %(message)s"
        )
    else:
        formatter = JsonFormatter(
            _FIELDS,
            rename_fields={"levelname": "level", "name": "logger"},
        )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(SessionIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service/session_id."""

    return logging.getLogger(name)
