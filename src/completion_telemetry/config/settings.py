"""Configurações da aplicação via variáveis de ambiente.

Todas as variáveis usam o prefixo COMPLETION_TELEMETRY_
(ex.: COMPLETION_TELEMETRY_LOG_LEVEL=DEBUG).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"json", "text"})


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="COMPLETION_TELEMETRY_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "completion_telemetry"
    version: str = "0.1.0"
    environment: str = "development"

    # Observabilidade
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # Admissão de sessões para analytics
    admit_unfinalized_sessions: bool = False  # Sessões sem cancel/select ficam de fora
    max_events_per_session: int = 10000  # Acima disso a sessão é rejeitada

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    def validate_logging_config(self) -> list[str]:
        """Valida nível e formato de log.

        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL '{self.log_level}' inválido. Valores válidos: {sorted(VALID_LOG_LEVELS)}"
            )
        if self.log_format.lower() not in VALID_LOG_FORMATS:
            errors.append("LOG_FORMAT inválido: use json | text")
        return errors

    def validate_replay_config(self) -> list[str]:
        """Valida limites do replay de sessões."""
        errors: list[str] = []
        if self.max_events_per_session < 1:
            errors.append("MAX_EVENTS_PER_SESSION deve ser >= 1")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
