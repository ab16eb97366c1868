"""Structured field-event logging utilities.

Responsibilities:
- Emit concise, deterministic single-line records for controller transitions.
- Route records through `loguru` so hosts can attach their own sinks.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class FieldEventLogger:
    """Emit deterministic event logs for numeric-field controller activity.

    Each instance owns one loguru handler that only accepts records bound to
    that instance, so several field loggers and host sinks can coexist.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "DEBUG") -> None:
        """Register an instance-scoped loguru sink with deterministic formatting."""

        self._sink = sink or sys.stderr
        self._logger_key = id(self)
        self._logger = _loguru_logger.bind(field_logger=self._logger_key)
        self._handler_id: int | None = _loguru_logger.add(
            self._sink,
            format="{message}",
            level=level,
            colorize=False,
            filter=self._accepts,
        )

    def _accepts(self, record: dict) -> bool:
        """Accept only records emitted through this logger."""

        return record["extra"].get("field_logger") == self._logger_key

    def close(self) -> None:
        """Remove this logger's handler, leaving all other handlers in place."""

        if self._handler_id is None:
            return
        _loguru_logger.remove(self._handler_id)
        self._handler_id = None

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured field log line."""

        line = f"[field] level={level} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def log_transition(self, event: str, state: str, **context: object) -> None:
        """Emit a controller state-transition record."""

        self._emit("DEBUG", event, state=state, **context)

    def log_notification(self, callback: str, value: str) -> None:
        """Emit a record for an outward callback invocation."""

        self._emit("INFO", "notify", callback=callback, value=value)
