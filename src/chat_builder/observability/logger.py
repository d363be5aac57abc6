"""Observability logger utilities.

Provides:
- ``get_logger``: named logger for package modules; never installs handlers.
- ``JSONFormatter``: :class:`logging.Formatter` that emits one JSON object per line.
- ``configure_logging``: applies the ``observability`` settings section.

Importing the package leaves the root logger alone. Output is only set up
when the application calls :func:`configure_logging`, directly or through
``initialize_from_settings``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that echo request URLs and headers at INFO/DEBUG.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def _parse_level(log_level: Any) -> int:
    return getattr(logging, str(log_level).upper(), logging.INFO)


# ── Named loggers ───────────────────────────────────────────────────


def get_logger(name: str = "chat_builder", log_level: Optional[str] = None) -> logging.Logger:
    """Return the logger called ``name``.

    Args:
        name: Logger name, usually the calling module's ``__name__``.
        log_level: Optional level string (e.g. ``"DEBUG"``) pinned on the logger.

    Returns:
        The logger. Handlers are left to :func:`configure_logging` or the host
        application.
    """
    logger = logging.getLogger(name)
    if log_level:
        logger.setLevel(_parse_level(log_level))
    return logger


# ── JSON Lines formatter ────────────────────────────────────────────


class JSONFormatter(logging.Formatter):
    """Format each record as a single JSON line.

    The object holds ``timestamp`` (UTC, ISO 8601), ``level``, ``logger`` and
    ``message``, followed by any fields passed through ``extra=``. A traceback
    lands under ``exception`` and a stack dump under ``stack``. Values the
    ``json`` module cannot encode are written as their ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in entry
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


# ── Settings-driven configuration ───────────────────────────────────


def configure_logging(
    observability: Mapping[str, Any],
    *,
    name: str = "chat_builder",
) -> logging.Logger:
    """Configure output for the package logger from the ``observability`` section.

    Recognised keys are ``log_level`` (e.g. ``"DEBUG"``) and ``log_format``
    (``"text"`` or ``"json"``).

    - ``text``: falls back to :func:`logging.basicConfig` on stderr, which does
      nothing if the application already configured the root logger.
    - ``json``: the package logger gets its own stderr handler using
      :class:`JSONFormatter` and stops propagating.

    Either way ``httpx``, ``httpcore`` and ``openai`` are quietened to WARNING.

    Args:
        observability: The ``observability`` mapping from settings.
        name: Logger to configure.

    Returns:
        The configured logger.
    """
    logger = get_logger(name, log_level=observability.get("log_level"))
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    json_handlers = [h for h in logger.handlers if isinstance(h.formatter, JSONFormatter)]
    if str(observability.get("log_format", "text")).lower() == "json":
        if not json_handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)
        logger.propagate = False
    else:
        for handler in json_handlers:
            logger.removeHandler(handler)
        logger.propagate = True
        logging.basicConfig(format=_DEFAULT_FORMAT, stream=sys.stderr)

    return logger
