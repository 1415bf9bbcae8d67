"""
mousefx.log - Logging module with proper Python exception handling.

Usage:
    from mousefx import log

    log.info("Hello")
    log.warn("Something wrong")

    try:
        do_something()
    except Exception as e:
        log.error(e, "Failed to do something")  # includes traceback

Messages go to the standard ``logging`` logger named "mousefx", so hosts
can attach their own handlers or raise the level as usual.
"""

import enum
import logging
import traceback
from typing import Callable, Optional

_logger = logging.getLogger("mousefx")
_logger.addHandler(logging.NullHandler())


class Level(enum.IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.DEBUG, msg_or_exc, context)
    else:
        _logger.debug(str(msg_or_exc))


def info(msg_or_exc, context: str = ""):
    """Log info message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.INFO, msg_or_exc, context)
    else:
        _logger.info(str(msg_or_exc))


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.WARN, msg_or_exc, context)
    else:
        _logger.warning(str(msg_or_exc))


def warning(msg_or_exc, context: str = ""):
    """Alias for warn()."""
    warn(msg_or_exc, context)


def error(msg_or_exc, context: str = ""):
    """Log error message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(Level.ERROR, msg_or_exc, context)
    else:
        _logger.error(str(msg_or_exc))


def exception(msg: str = ""):
    """Log error with current exception traceback."""
    _logger.exception(msg)


def _log_exception(level: Level, exc: BaseException, context: str):
    """Format and log exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        full_msg = f"{context}: {exc_type}: {exc_msg}\n{tb}"
    else:
        full_msg = f"{exc_type}: {exc_msg}\n{tb}"

    _logger.log(int(level), full_msg)


def set_level(level: Level):
    _logger.setLevel(int(level))


class _CallbackHandler(logging.Handler):
    def __init__(self, callback: Callable[[Level, str], None]):
        super().__init__()
        self._callback = callback

    def emit(self, record: logging.LogRecord):
        self._callback(Level(_nearest_level(record.levelno)), record.getMessage())


def _nearest_level(levelno: int) -> int:
    for level in (Level.ERROR, Level.WARN, Level.INFO):
        if levelno >= level:
            return level
    return Level.DEBUG


_callback_handler: Optional[_CallbackHandler] = None


def set_callback(callback: Optional[Callable[[Level, str], None]]):
    """Route every message to ``callback(level, text)``; None removes it."""
    global _callback_handler
    if _callback_handler is not None:
        _logger.removeHandler(_callback_handler)
        _callback_handler = None
    if callback is not None:
        _callback_handler = _CallbackHandler(callback)
        _logger.addHandler(_callback_handler)
