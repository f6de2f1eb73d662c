"""
Logger factory for tripcode components.

Loggers are named ``tripcode.<component>``. Importing the library configures
nothing; ``setup_logging`` attaches one stderr handler and is called by the
CLI at startup. The level comes from the environment so dispatch tracing
can be turned on without code changes:

    TRIPCODE_LOG_LEVEL=DEBUG tripcode generate -t 2ch "#1145145554560721.."
"""

import logging
import os
import threading

from tripcode.config import DEBUG_ENV, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

ROOT_LOGGER_NAME = "tripcode"

_setup_lock = threading.Lock()


def _resolve_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if os.getenv(DEBUG_ENV):
        level_name = "DEBUG"
    level = logging.getLevelName(level_name)
    # getLevelName answers "Level X" for names it does not know.
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(force: bool = False) -> logging.Logger:
    """Attach the stderr handler to the package logger if it has none yet."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    with _setup_lock:
        if force:
            for handler in list(root.handlers):
                root.removeHandler(handler)
        if not root.handlers:
            handler = logging.StreamHandler()

            # Structured formatting
            formatter = logging.Formatter(
                "[%(asctime)s.%(msecs)03d] %(levelname)s [%(name)s]: %(message)s",
                datefmt="%H:%M:%S",
            )
            handler.setFormatter(formatter)
            root.addHandler(handler)
        root.setLevel(_resolve_level())
    return root


def get_logger(component: str) -> logging.Logger:
    # No handler is attached here; the CLI calls setup_logging() on start.
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


def log_event(logger: logging.Logger, level: str, message: str, **kwargs) -> None:
    """Structured logging with optional context."""
    log_method = getattr(logger, level.lower(), logger.info)
    if not logger.isEnabledFor(getattr(logging, level.upper(), logging.INFO)):
        return

    if kwargs:
        # Add context to message
        context = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        message = f"{message} | {context}"

    log_method(message)
