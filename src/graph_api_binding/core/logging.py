"""
Logging helpers for the Graph API binding.

Modules obtain loggers through :func:`get_logger`, which returns a
:class:`logging.LoggerAdapter` carrying structured extras. The
:class:`StructuredLogFormatter` renders those extras as ``key=value`` pairs
after the message so request traces stay greppable. Credentials are masked
before they reach any handler.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from copy import copy
from logging import LoggerAdapter
from typing import Any, Iterator, Mapping, MutableMapping, Optional, Tuple, Union

LevelLike = Union[int, str, None]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
FALLBACK_LEVEL = logging.WARNING
LEVEL_ENV = "GRAPH_API_LOG_LEVEL"
COLOR_ENV = "GRAPH_API_LOG_COLOR"

# Request and error context is printed first, in this order; other extras follow alphabetically.
_LEADING_KEYS = ("method", "url", "status_code", "object_id", "connection", "entity", "error_type", "code", "subcode")
_SECRET_KEYS = frozenset({"access_token", "authorization", "token"})
_REDACTED = "***"

_ANSI_CODES = {
    logging.DEBUG: "36",
    logging.INFO: "32",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "95",
}

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_root_handler: Optional[logging.Handler] = None


def _level_from(level: LevelLike) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv(LEVEL_ENV) or "").strip().upper()
    value = logging.getLevelName(name) if name else FALLBACK_LEVEL
    return value if isinstance(value, int) else FALLBACK_LEVEL


def _colour_enabled(stream: Any) -> bool:
    setting = os.getenv(COLOR_ENV, "").strip().lower()
    if setting in ("1", "true", "yes", "on"):
        return True
    if setting in ("0", "false", "no", "off"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def redact(key: str, value: Any) -> Any:
    """Replace credential values, including ones nested in mappings, with ``***``."""

    if value and key.lower() in _SECRET_KEYS:
        return _REDACTED
    if isinstance(value, Mapping):
        return {name: redact(str(name), item) for name, item in value.items()}
    return value


def structured_extras(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Yield the non-standard, non-empty attributes of ``record`` with secrets redacted."""

    extras = {key: value for key, value in vars(record).items() if value is not None and key not in _STANDARD_ATTRS and not key.startswith("_")}
    leading = [key for key in _LEADING_KEYS if key in extras]
    trailing = sorted(key for key in extras if key not in _LEADING_KEYS)
    for key in (*leading, *trailing):
        yield key, redact(key, extras[key])


def _render(value: Any) -> str:
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + ", ".join(_render(item) for item in value) + "]"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """Appends ``key=value`` extras to each line and can colour the level name."""

    def __init__(self, *, use_color: bool = False) -> None:
        super().__init__(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        shown = record
        code = _ANSI_CODES.get(record.levelno) if self.use_color else None
        if code:
            shown = copy(record)
            shown.levelname = f"\033[{code}m{record.levelname}\033[0m"
        line = super().format(shown)
        pairs = " ".join(f"{key}={_render(value)}" for key, value in structured_extras(record))
        return f"{line} | {pairs}" if pairs else line


def configure_logging(level: LevelLike = None, *, force: bool = False) -> logging.Handler:
    """
    Install the structured stderr handler on the root logger once.

    Parameters
    ----------
    level:
        Optional level override. Falls back to ``GRAPH_API_LOG_LEVEL`` or ``WARNING``.
    force:
        Replace the root handlers even if the binding installed one before.

    Returns
    -------
    logging.Handler
        The handler installed by the binding.
    """

    global _root_handler
    if _root_handler is not None and not force:
        return _root_handler

    resolved = _level_from(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(StructuredLogFormatter(use_color=_colour_enabled(handler.stream)))
    logging.basicConfig(level=resolved, handlers=[handler], force=force)
    _root_handler = handler
    return handler


class ContextAdapter(LoggerAdapter):
    """Adds per-call ``extra`` to the bound context instead of replacing it."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        call_extra = {key: value for key, value in (kwargs.get("extra") or {}).items() if value is not None}
        kwargs["extra"] = {**(self.extra or {}), **call_extra}
        return msg, kwargs


def get_logger(name: str, *, level: LevelLike = None, extra: Optional[Mapping[str, object]] = None) -> LoggerAdapter:
    """
    Return a :class:`ContextAdapter` for ``name`` bound to ``extra``.

    ``None`` values in ``extra`` are dropped. A ``level`` applies to this
    logger only; the root handler is configured on first use.
    """

    configure_logging(level)
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_level_from(level))
    return ContextAdapter(logger, {key: value for key, value in (extra or {}).items() if value is not None})
