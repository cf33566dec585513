"""Ciclo de vida da validade de uma sessão.

Apenas dois estados; a transição VALID → INVALIDATED é de mão única.
"""

from __future__ import annotations

from enum import StrEnum


class ValidationState(StrEnum):
    """Estados de validade de uma sessão."""

    VALID = "VALID"
    """Nenhuma inconsistência detectada até o último evento aceito."""

    INVALIDATED = "INVALIDATED"
    """Inconsistência detectada; a sessão está condenada."""


def next_validation_state(current: ValidationState, check_passed: bool) -> ValidationState:
    """Aplica o resultado de uma checagem ao estado atual.

    Nunca retorna VALID a partir de INVALIDATED.
    """
    if current is ValidationState.INVALIDATED or not check_passed:
        return ValidationState.INVALIDATED
    return ValidationState.VALID
