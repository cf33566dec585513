"""Erros de uso do validador e de leitura do log de eventos.

Eventos inconsistentes NUNCA viram exceção: apenas invalidam a sessão.
Estes erros cobrem entradas fora do contrato do validador.
"""

from __future__ import annotations


class SessionNotStartedError(ValueError):
    """Fluxo de eventos não foi aberto por SESSION_STARTED."""


class EventLogError(ValueError):
    """Linha de log malformada ou sessão misturada com outra.

    Contém o número da linha (1-based) quando conhecido.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
