from __future__ import annotations

"""Logger naming, handler setup and IO tracing for tagwalk.

Every module logs through a child of the 'tagwalk' base logger
(`get_logger('walker')` -> 'tagwalk.walker'). The base logger owns one
stderr handler; its formatter is either the plain "LEVEL: message" line or
`JsonLogFormatter`, and can be switched on a later call to
`setup_base_logger`.

Structured context travels on the record as `context` (pass
`extra={'context': {...}}`); the JSON formatter emits it as `ctx`.
"""

import logging
import os
import sys
from typing import Any, Dict, Optional, TextIO

from tagwalk.constants import PROGRAM_NAME

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_ENV = "TAGWALK_TRACE_IO"

# Marks the handler installed by setup_base_logger, so handlers added by
# embedders or test harnesses are left alone.
_OWNED_ATTR = "_tagwalk_owned"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record.

    Fields: ts (UTC, milliseconds), level, module (logger name), msg,
    version, and ctx when the record carries a non-empty `context` dict.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        try:
            from tagwalk import __version__
        except ImportError:
            return os.getenv("TAGWALK_VERSION", "unknown")
        return str(__version__)

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx
        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_formatter(json_logs: bool) -> logging.Formatter:
    return JsonLogFormatter() if json_logs else logging.Formatter(PLAIN_FORMAT)


def _owned_handler(base: logging.Logger) -> Optional[logging.Handler]:
    for handler in base.handlers:
        if getattr(handler, _OWNED_ATTR, False):
            return handler
    return None


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure and return the 'tagwalk' base logger.

    The first call installs a stderr handler (or one on *stream*). Later
    calls only update the level and the formatter of that handler. If a
    foreign handler is already attached and none of ours, only the level
    is set.
    """
    base = logging.getLogger(PROGRAM_NAME)
    base.setLevel(level)

    handler = _owned_handler(base)
    if handler is not None:
        handler.setFormatter(_make_formatter(json_logs))
        return base
    if base.handlers:
        return base

    handler = logging.StreamHandler(stream or sys.stderr)
    setattr(handler, _OWNED_ATTR, True)
    handler.setFormatter(_make_formatter(json_logs))
    base.addHandler(handler)
    base.propagate = False
    return base


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return 'tagwalk' or one of its children; bare names are prefixed."""
    if not name or name == PROGRAM_NAME or name.startswith(PROGRAM_NAME + "."):
        return logging.getLogger(name or PROGRAM_NAME)
    return logging.getLogger(f"{PROGRAM_NAME}.{name}")


def is_trace_io_enabled() -> bool:
    return os.getenv(TRACE_ENV) == "1"


def trace_io(logger: logging.Logger, message: str, **ctx: Any) -> None:
    """Log a filesystem probe at DEBUG level when TAGWALK_TRACE_IO=1.

    The keyword context is appended to the plain message and attached to
    the record for the JSON formatter.
    """
    if not is_trace_io_enabled():
        return
    if not ctx:
        logger.debug("%s", message)
        return
    rendered = " ".join(f"{k}={v!r}" for k, v in ctx.items())
    logger.debug("%s | %s", message, rendered, extra={"context": ctx})
