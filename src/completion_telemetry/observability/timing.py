"""Medição de latência por componente, com campos de contexto."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Generator
from typing import Any

from completion_telemetry.observability.logging import get_logger

logger = get_logger(__name__)

OUTCOME_OK = "ok"


@contextlib.contextmanager
def timed(
    component: str, level: int = logging.DEBUG
) -> Generator[dict[str, Any], None, None]:
    """Mede o bloco e emite um registro component_latency ao sair.

    O dict retornado é um span: o chamador pode anexar campos
    (ex.: span["events"] = 12) que seguem no mesmo registro.
    outcome é "ok" ou o nome da exceção que atravessou o bloco;
    a exceção nunca é suprimida.

    Uso:
        with timed("session_replay") as span:
            span["events"] = len(events)
    """
    span: dict[str, Any] = {}
    outcome = OUTCOME_OK
    start = time.perf_counter()
    try:
        yield span
    except BaseException as exc:
        outcome = type(exc).__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.log(
            level,
            "component_latency",
            extra={
                **span,
                "component": component,
                "outcome": outcome,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
