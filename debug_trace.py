"""
debug_trace.py

Category-tagged tracing for the desktop front-end.

Enable by setting the environment variable ``AREASYNC_TRACE=1``.  Trace
lines go to stderr and to ``areasync_trace.log`` in the platform log
directory.  Pointer-move events are only traced with ``AREASYNC_TRACE=2``.
"""

from __future__ import annotations

import logging
import os
from functools import wraps
from pathlib import Path
from typing import Optional

import platformdirs

APP_NAME = "areasync"

# 0 = off, 1 = trace, 2 = also trace pointer moves (very verbose)
TRACE_LEVEL = int(os.environ.get("AREASYNC_TRACE", "0") or 0)

LOG_FILE_NAME = "areasync_trace.log"

_logger = logging.getLogger("areasync.trace")
_file_handler: Optional[logging.FileHandler] = None
_stream_handler: Optional[logging.StreamHandler] = None


def configure(level: Optional[int] = None, log_dir: Optional[Path] = None) -> None:
    """Attach stderr and file handlers when tracing is enabled.

    Args:
        level: Override for ``TRACE_LEVEL``.
        log_dir: Override for the platform log directory.
    """
    global TRACE_LEVEL, _file_handler, _stream_handler
    if level is not None:
        TRACE_LEVEL = level
    if not TRACE_LEVEL or _file_handler is not None:
        return

    fmt = logging.Formatter("[%(asctime)s.%(msecs)03d] %(message)s", datefmt="%H:%M:%S")
    _stream_handler = logging.StreamHandler()
    _stream_handler.setFormatter(fmt)
    _logger.addHandler(_stream_handler)

    directory = Path(log_dir) if log_dir else Path(platformdirs.user_log_dir(APP_NAME))
    directory.mkdir(parents=True, exist_ok=True)
    _file_handler = logging.FileHandler(directory / LOG_FILE_NAME, mode="w", encoding="utf-8")
    _file_handler.setFormatter(fmt)
    _logger.addHandler(_file_handler)
    _logger.setLevel(logging.DEBUG)
    _logger.propagate = False


def trace(msg: str, category: str = "INFO") -> None:
    """Emit a trace line tagged with *category*."""
    if not TRACE_LEVEL:
        return
    if category == "MOVE" and TRACE_LEVEL < 2:
        return
    _logger.debug("[%s] %s", category, msg)


def trace_exception(msg: str = "Exception") -> None:
    """Trace the exception currently being handled, with traceback."""
    if not TRACE_LEVEL:
        return
    _logger.error("[ERROR] %s", msg, exc_info=True)


def trace_call(category: str = "CALL"):
    """Decorator to trace function entry, exit and exceptions."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not TRACE_LEVEL:
                return func(*args, **kwargs)
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
            trace(f"<<< {func_name}", category)
            return result
        return wrapper
    return decorator


def close_log() -> None:
    """Detach the trace handlers and close the log file."""
    global _file_handler, _stream_handler
    if _stream_handler is not None:
        _logger.removeHandler(_stream_handler)
        _stream_handler = None
    if _file_handler is not None:
        _logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
