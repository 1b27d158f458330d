"""
monoalign Logging

Thin wrapper over the standard logging module that accepts structured keyword
context on every call:

    logger = get_logger(__name__)
    logger.info("Scanned workspace", path="apps/web", kind="app")

Context keywords are attached to the record and rendered either as
``key=value`` pairs or, with JSON output enabled, as fields of one JSON object
per line. A per-run id is stored in a ContextVar and added to every record.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "monoalign"

_run_id: ContextVar[Optional[str]] = ContextVar("monoalign_run_id", default=None)

_RESERVED_ATTRS = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


def set_run_id(run_id: Optional[str] = None) -> str:
    """Set the correlation id for the current run and return it."""
    value = run_id or uuid.uuid4().hex[:12]
    _run_id.set(value)
    return value


def get_run_id() -> Optional[str]:
    """Get the correlation id of the current run, if any."""
    return _run_id.get()


def clear_run_id() -> None:
    """Forget the current correlation id."""
    _run_id.set(None)


def _context_of(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()
        return True


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_context_of(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """Human readable format with trailing key=value context."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in _context_of(record).items() if v is not None}
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class MonoalignLogger:
    """
    Logger accepting structured keyword context.

    Wraps a standard ``logging.Logger``; every keyword argument other than
    ``exc_info`` becomes an attribute of the emitted record.
    """

    def __init__(self, name: str):
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, message: str, exc_info: Any = None, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {k: v for k, v in context.items() if k not in _RESERVED_ATTRS}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **context: Any) -> None:
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(logging.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, **context)

    def exception(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, exc_info=True, **context)


def get_logger(name: str) -> MonoalignLogger:
    """Get a structured logger under the ``monoalign`` namespace."""
    return MonoalignLogger(name)


def configure_logging(level: str = "WARNING", json_format: bool = False, stream=None) -> None:
    """
    Install a single handler on the monoalign root logger.

    Calling it again replaces the previous handler, so the CLI can reconfigure
    after reading settings.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines instead of plain text
        stream: Target stream (defaults to stderr)
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_format else PlainFormatter())
    handler.addFilter(_RunIdFilter())
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
