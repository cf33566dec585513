"""Testes do entry point de linha de comando."""

from __future__ import annotations

import json
import logging

import pytest

from completion_telemetry.adapters.event_log import encode_event
from completion_telemetry.cli import (
    EXIT_ALL_VALID,
    EXIT_BAD_LOG,
    EXIT_INVALID_SESSIONS,
    main,
)
from tests.helpers.session_events import cancelled, down, explicit_select, started, up


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _write_log(tmp_path, events) -> str:
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join(encode_event(e) for e in events) + "\n", encoding="utf-8")
    return str(path)


class TestCli:
    """Testes para main()."""

    def test_all_valid(self, tmp_path, capsys) -> None:
        path = _write_log(tmp_path, [started(), down(1), explicit_select(1)])
        assert main([path, "--log-level", "WARNING"]) == EXIT_ALL_VALID

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        verdict = json.loads(lines[0])
        assert verdict["valid"] is True
        assert verdict["admitted"] is True

    def test_invalid_session(self, tmp_path, capsys) -> None:
        events = [
            started(session_id="a"),
            up(1, session_id="a"),
            started(session_id="b"),
            cancelled(session_id="b"),
        ]
        path = _write_log(tmp_path, events)
        assert main([path, "--log-format", "text"]) == EXIT_INVALID_SESSIONS

        verdicts = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert [(v["session_id"], v["valid"]) for v in verdicts] == [("a", False), ("b", True)]
        assert verdicts[0]["invalidation"]["reason"] == "unexpected_up_position"

    def test_malformed_log(self, tmp_path, capsys) -> None:
        path = tmp_path / "broken.jsonl"
        path.write_text(encode_event(started()) + "\n{oops\n", encoding="utf-8")
        assert main([str(path)]) == EXIT_BAD_LOG
        assert "line 2" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "missing.jsonl")]) == EXIT_BAD_LOG
        assert "error:" in capsys.readouterr().err

    def test_invalid_settings(self, tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("COMPLETION_TELEMETRY_LOG_FORMAT", "xml")
        path = _write_log(tmp_path, [started()])
        assert main([path]) == EXIT_BAD_LOG
        assert "LOG_FORMAT" in capsys.readouterr().err

    def test_invalid_utf8_line(self, tmp_path, capsys) -> None:
        """Bytes que não são utf-8 viram erro de log, não traceback."""
        path = tmp_path / "binary.jsonl"
        path.write_bytes(encode_event(started()).encode("utf-8") + b"\n\xff\xfe{\n")
        assert main([str(path)]) == EXIT_BAD_LOG
        err = capsys.readouterr().err
        assert "line 2" in err
        assert "utf-8" in err

    def test_invalid_log_level_override(self, tmp_path, capsys) -> None:
        """--log-level passa pela mesma validação das settings."""
        path = _write_log(tmp_path, [started()])
        assert main([path, "--log-level", "verbose"]) == EXIT_BAD_LOG
        assert "LOG_LEVEL" in capsys.readouterr().err

    def test_lowercase_log_level_override_accepted(self, tmp_path) -> None:
        path = _write_log(tmp_path, [started(), cancelled()])
        assert main([path, "--log-level", "warning"]) == EXIT_ALL_VALID
