"""CLI entry point: valida um log JSON lines de sessões de autocompletar."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from completion_telemetry.adapters.event_log import read_event_log
from completion_telemetry.application.replay import replay_event_log
from completion_telemetry.config.settings import Settings, get_settings
from completion_telemetry.domain.session.errors import EventLogError, SessionNotStartedError
from completion_telemetry.observability.logging import configure_logging

EXIT_ALL_VALID = 0
EXIT_INVALID_SESSIONS = 1
EXIT_BAD_LOG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="completion-telemetry-validate",
        description="Replay completion session logs and report which sessions are consistent",
    )
    parser.add_argument("path", help="JSON lines event log")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override COMPLETION_TELEMETRY_LOG_LEVEL",
    )
    parser.add_argument(
        "--log-format",
        choices=("json", "text"),
        default=None,
        help="Override COMPLETION_TELEMETRY_LOG_FORMAT",
    )
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Aplica overrides da linha de comando antes da validação."""
    update: dict[str, str] = {}
    if args.log_level:
        update["log_level"] = args.log_level
    if args.log_format:
        update["log_format"] = args.log_format
    return settings.model_copy(update=update) if update else settings


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _apply_overrides(get_settings(), args)

    errors = settings.validate_logging_config() + settings.validate_replay_config()
    if errors:
        print("; ".join(errors), file=sys.stderr)
        return EXIT_BAD_LOG

    configure_logging(
        settings.log_level.upper(), settings.service_name, settings.log_format.lower()
    )

    try:
        verdicts = replay_event_log(read_event_log(args.path), settings)
    except (EventLogError, SessionNotStartedError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_LOG

    for verdict in verdicts:
        print(verdict.model_dump_json())

    if all(verdict.valid for verdict in verdicts):
        return EXIT_ALL_VALID
    return EXIT_INVALID_SESSIONS


if __name__ == "__main__":
    sys.exit(main())
