"""Structured logging utilities for the package.

One shared ``unified_llm`` logger is configured lazily with a stderr handler
and the JSON formatter; module loggers (``unified_llm.openai`` ...) propagate
to it. The level comes from ``UNIFIED_LLM_LOG_LEVEL`` and can be changed at
runtime with ``configure_logger``. Events are emitted through ``log_event`` as
one JSON object per line.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "unified_llm"
LOG_LEVEL_ENV = "UNIFIED_LLM_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_unified_llm_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_unified_llm_console_handler"
_FILE_HANDLER_ATTR = "_unified_llm_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into its integer constant.

    Accepts DEBUG, INFO, WARN/WARNING, ERROR and CRITICAL case-insensitively
    and falls back to ``default`` for anything else.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``unified_llm`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(
    name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO
) -> logging.Logger:
    """Return a package logger, configuring the shared base logger on first use.

    Child loggers (names below ``unified_llm``) carry no handlers of their own
    and propagate to the base logger.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level, numeric or by name. ``None`` keeps the current level.
    file_path: Optional[str]
        When given, attach (or retarget) a rotating file handler writing to
        this path. When ``None``, remove a previously attached managed file
        handler. Handlers added by the application are left alone.
    json_mode: bool
        JSON formatter when ``True``, plain text otherwise.

    Returns
    -------
    logging.Logger
        The configured base logger.
    """
    logger = get_logger(json_mode=json_mode)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for handler in managed:
            logger.removeHandler(handler)
            handler.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    directory = os.path.dirname(abs_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for handler in managed:
        if getattr(handler, "baseFilename", None) == abs_path:
            existing = handler  # type: ignore[assignment]
            continue
        logger.removeHandler(handler)
        with contextlib.suppress(OSError):
            handler.close()

    if existing is None:
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_formatter(json_mode))
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
    """Emit one structured log event.

    Parameters
    ----------
    logger: logging.Logger
        Target logger, normally obtained from ``get_logger``.
    event: str
        Event name (``llm.request``, ``llm.error`` ...).
    ctx: LogContext | None
        Provider/model context merged into the payload.
    level: int
        Logging level of the record.
    keep_none: bool
        Keep keys whose value is ``None`` (encoded as JSON ``null``).
    **fields: Any
        Additional serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
