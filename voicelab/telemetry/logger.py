"""Structured client logging utilities.

Responsibilities:
- Emit concise, deterministic request-level log lines through `loguru`.
- Scope each handle to its own sink so clients never share hidden global state.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, TextIO
from uuid import uuid4

from loguru import logger as _loguru_logger


_EXTRA_KEY = "voicelab_handle"
_DEFAULT_LOGURU_HANDLER_ID = 0


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


class ClientLogger:
    """Logging handle passed into API clients at construction.

    A handle created without a sink is silent. A handle with a sink registers one
    `loguru` handler that only accepts records emitted through this handle.
    """

    def __init__(
        self,
        sink: TextIO | Callable[[Any], None] | None = None,
        level: str = "INFO",
    ) -> None:
        self._token = uuid4().hex
        self._logger = _loguru_logger.bind(**{_EXTRA_KEY: self._token})
        self._handler_id: int | None = None
        if sink is not None:
            self._handler_id = _loguru_logger.add(
                sink,
                format="{message}",
                level=level,
                colorize=False,
                filter=self._owns_record,
            )

    @property
    def enabled(self) -> bool:
        return self._handler_id is not None

    def _owns_record(self, record: dict[str, Any]) -> bool:
        return record["extra"].get(_EXTRA_KEY) == self._token

    def _emit(self, level: str, event: str, **context: object) -> None:
        if self._handler_id is None:
            return
        line = f"[voicelab] level={level} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def log_info(self, event: str, **context: object) -> None:
        self._emit("INFO", event, **context)

    def log_warning(self, event: str, **context: object) -> None:
        self._emit("WARNING", event, **context)

    def log_error(self, event: str, **context: object) -> None:
        self._emit("ERROR", event, **context)

    def close(self) -> None:
        """Detach this handle's sink; later emits become no-ops."""

        handler_id, self._handler_id = self._handler_id, None
        if handler_id is None:
            return
        try:
            _loguru_logger.remove(handler_id)
        except ValueError:
            # the application already removed it, e.g. via `loguru.logger.remove()`
            return


def setup_logging(
    level: str = "INFO",
    sink: TextIO | Callable[[Any], None] | None = None,
) -> ClientLogger:
    """Return a handle writing to `sink` (stderr by default) for an application.

    Removes `loguru`'s pre-installed stderr handler so handle lines are not
    duplicated there; handlers added by the application or by other
    `ClientLogger` handles are left in place. Library callers that manage their
    own `loguru` configuration should construct `ClientLogger` directly.
    """

    try:
        _loguru_logger.remove(_DEFAULT_LOGURU_HANDLER_ID)
    except ValueError:
        pass  # already removed by an earlier call or by the application
    return ClientLogger(sink=sink if sink is not None else sys.stderr, level=level)
