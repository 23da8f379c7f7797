"""Logging helpers shared across sources, cache and lookup code.

Keeps structured context consistent (``extra_context``), gates expensive
DEBUG payloads (``is_debug_enabled``), measures durations (``Timer``) and
keeps credentials out of log lines (``safe_url``).
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from constants import Constants

_SENSITIVE_PARAMS = {"token", "access_token", "api_key", "apikey", "key", "password", "secret"}
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger for the CLI.

    The level is taken from ``level`` when given, otherwise from the
    ``LATEST_LOG_LEVEL`` environment variable, otherwise WARNING. Handlers
    installed by a previous call are replaced so repeated calls (tests, the
    CLI entry point) never duplicate output.

    Args:
        level: Level name such as "DEBUG" or "info".
        log_file: Optional path of a file that receives timestamped records.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "WARNING").upper()
    root = logging.getLogger()
    root.setLevel(_LEVELS.get(level_name, logging.WARNING))

    for handler in list(root.handlers):
        if getattr(handler, "_latest_handler", False):
            root.removeHandler(handler)
            handler.close()

    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    setattr(stream, "_latest_handler", True)
    root.addHandler(stream)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        setattr(file_handler, "_latest_handler", True)
        root.addHandler(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    None values are dropped so formatters only see populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


def safe_url(url: str) -> str:
    """Return ``url`` with userinfo and sensitive query values redacted."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "[REDACTED]@" + netloc.rsplit("@", 1)[1]
    query = parts.query
    if query:
        pairs = [
            (k, "[REDACTED]" if k.lower() in _SENSITIVE_PARAMS else v)
            for k, v in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(pairs, safe="[]:+")
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds, up to now if the block is still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000, 2)
