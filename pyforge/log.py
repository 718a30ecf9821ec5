"""Diagnostic logging for the pyforge command.

Logging is quiet by default: only warnings and worse reach stderr, and user
facing errors go through ``render`` instead. ``cli.main`` sets it up once per
run, and every record handled afterwards carries that run's ``run_id`` and
subcommand name.

Debug output is switched on by ``-v/--verbose``, by ``verbose = true`` in the
settings file (see ``set_verbose``), or from the environment:

    PYFORGE_DEBUG=1 (or true/yes)
    LOG_LEVEL=debug

PYFORGE_LOG_FORMAT=json swaps the one-line terminal format for JSON lines.
Records logged with ``extra={"category": ..., "exit_code": ...}`` show those
two fields inline in the terminal format; the JSON format keeps every extra.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "pyforge"
DEBUG_ENV_VAR = "PYFORGE_DEBUG"
FORMAT_ENV_VAR = "PYFORGE_LOG_FORMAT"

_TRUTHY = {"1", "true", "yes"}

# Attributes every LogRecord has; whatever else is on a record came in via ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


class _InvocationFilter(logging.Filter):
    """Stamp each record with the run it belongs to."""

    def __init__(self, run_id: str, command: str) -> None:
        super().__init__()
        self.run_id = run_id
        self.command = command

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        record.command = self.command
        return True


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(_extras(record))
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class _TerminalFormatter(logging.Formatter):
    """``[DBG] message [category=... exit_code=...] (run=abcd1234)``"""

    _TAGS = {"DEBUG": "DBG", "INFO": "INF", "WARNING": "WRN", "ERROR": "ERR", "CRITICAL": "CRT"}
    _SHOWN_EXTRAS = ("category", "exit_code")

    def format(self, record: logging.LogRecord) -> str:
        tag = self._TAGS.get(record.levelname, record.levelname[:3])
        parts = [f"[{tag}]", record.getMessage()]

        shown = [
            f"{key}={getattr(record, key)}"
            for key in self._SHOWN_EXTRAS
            if hasattr(record, key)
        ]
        if shown:
            parts.append(f"[{' '.join(shown)}]")

        run_id = getattr(record, "run_id", "")
        if run_id:
            parts.append(f"(run={run_id[:8]})")
        return " ".join(parts)


def debug_requested() -> bool:
    """True when PYFORGE_DEBUG or LOG_LEVEL ask for debug output."""
    if os.getenv(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY:
        return True
    return os.getenv("LOG_LEVEL", "").strip().lower() == "debug"


def configure_logging(*, run_id: str = "", command: str = "", verbose: bool = False) -> None:
    """Route the ``pyforge`` logger to stderr for one run, replacing any earlier setup."""
    as_json = os.getenv(FORMAT_ENV_VAR, "").strip().lower() == "json"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter() if as_json else _TerminalFormatter())
    handler.addFilter(_InvocationFilter(run_id or new_run_id(), command))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose or debug_requested() else logging.WARNING)


def set_verbose() -> None:
    """Turn on debug output once settings have been read."""
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
