"""Structured logging for the gateway client and stream orchestrator.

All records go through the ``inference_gateway`` logger, which owns a single
stderr handler (JSON by default). Child loggers such as
``inference_gateway.client`` and ``inference_gateway.stream`` only propagate.

Two emitters are provided:

* ``log_event`` writes one JSON object per record: ``{"event": ...}`` merged
  with the :class:`LogContext` fields and any keyword fields.
* ``normalized_log_event`` additionally guarantees the keys in
  ``REQUIRED_NORMALIZED_KEYS`` so request and stream summaries can be parsed
  uniformly.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "inference_gateway"
LOG_LEVEL_ENV = "INFERENCE_GATEWAY_LOG_LEVEL"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
# handler tag -> "console" | "file"
_ROLE_ATTR = "_inference_gateway_role"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name (any case) to its constant; unknown names give ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    if json_mode:
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def _handlers(logger: logging.Logger, role: str) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _ROLE_ATTR, None) == role]


def _drop(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    handler.close()


def _console(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _ROLE_ATTR, "console")
    return handler


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)
    consoles = _handlers(logger, "console")
    if not consoles:
        logger.setLevel(_parse_level(env_level, default=level))
        logger.addHandler(_console(json_mode, logger.level))
        logger.propagate = True
        return logger
    if env_level:
        logger.setLevel(_parse_level(env_level, default=logger.level))
    for handler in consoles:
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            # stderr was swapped (pytest capture); rebind to the live stream
            _drop(logger, handler)
            logger.addHandler(_console(json_mode, logger.level))
        else:
            handler.setLevel(logger.level)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return ``name`` under the ``inference_gateway`` hierarchy, initializing the base logger once."""
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the base logger at runtime.

    Args:
        level: New level (constant or name); ``None`` keeps the current one.
        file_path: Attach a rotating file handler writing to this path. Passing
            ``None`` detaches any file handler added by an earlier call.
        json_mode: Formatter used for the file handler.

    Returns:
        The ``inference_gateway`` logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in _handlers(logger, "file"):
        if target is None or getattr(handler, "baseFilename", None) != target:
            _drop(logger, handler)
    if target is None or _handlers(logger, "file"):
        for handler in _handlers(logger, "file"):
            handler.setFormatter(_make_formatter(json_mode))
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    handler = RotatingFileHandler(
        target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logger.level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _ROLE_ATTR, "file")
    logger.addHandler(handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON line; ``None`` fields are dropped unless ``keep_none``."""
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _tokens_field(tokens: Any) -> Optional[Dict[str, Any]]:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if hasattr(tokens, "to_dict"):
        return tokens.to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    level: int = logging.INFO,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Like ``log_event`` but always carries the normalized keys.

    ``error_code`` is left out when ``None``. Extra fields never replace a
    normalized key that already has a value, and ``None`` extras are skipped.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "REQUIRED_NORMALIZED_KEYS",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
]
