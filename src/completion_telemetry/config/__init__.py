"""Configurações centralizadas do completion_telemetry.

Uso típico:
    from completion_telemetry.config import get_settings
"""

from completion_telemetry.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
