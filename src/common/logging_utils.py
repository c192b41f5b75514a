"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module owns
handler setup and the small helpers used for structured DEBUG traces.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome", "target", "duration_ms")


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra_context`` fields to the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        ctx = getattr(record, "context", None)
        if not ctx:
            return base
        pairs = " ".join(f"{k}={ctx[k]}" for k in sorted(ctx))
        return f"{base} [{pairs}]"


def _level_from_env() -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(log_file: Optional[str] = None) -> None:
    """Install the console handler (and optionally a file handler) on the root logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_fftwprobe", False):
            root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(ContextFormatter(Constants.LOG_FORMAT))
    console._fftwprobe = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(ContextFormatter(Constants.LOG_FILE_FORMAT))
        file_handler._fftwprobe = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    root.setLevel(_level_from_env())


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra=`` mapping for a structured log call.

    Unknown keys are kept; ``None`` values are dropped.
    """
    ctx = {k: v for k, v in fields.items() if v is not None}
    ordered = {k: ctx.pop(k) for k in _CONTEXT_FIELDS if k in ctx}
    ordered.update(ctx)
    return {"context": ordered}


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
