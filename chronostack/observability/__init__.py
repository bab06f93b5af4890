"""
Observability Layer

RESPONSIBILITY: Logging configuration for every layer
OUTPUTS: Configured stdlib loggers

WHAT THIS LAYER MUST NOT DO:
============================
- Modify pipeline behavior
- Filter or reinterpret events (only record decisions)
"""

from __future__ import annotations
import logging
import os
import sys


LOG_LEVEL_ENV = "CHRONOSTACK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ROOT_LOGGER = "chronostack"
_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def resolve_log_level() -> str:
    """Log level from the environment, falling back on invalid values."""
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if level not in VALID_LOG_LEVELS:
        return DEFAULT_LOG_LEVEL
    return level


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(getattr(logging, resolve_log_level()))
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger for the given module."""
    _configure_root()
    if name == _ROOT_LOGGER or name.startswith(_ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
