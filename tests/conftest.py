from __future__ import annotations

import pytest

from completion_telemetry.config.settings import Settings, get_settings
from completion_telemetry.domain.session.validator import SessionValidator
from tests.helpers.session_events import started


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def validator() -> SessionValidator:
    """Sessão com 3 candidatos (ids 0, 1, 2), cursor em 0."""
    return SessionValidator(started(3))
