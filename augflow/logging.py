"""Logging for the augflow package.

Every module logs under the ``augflow`` hierarchy through ``get_logger``.
Module loggers carry no level of their own, so the level set on the
``augflow`` logger governs the engine, the loaders and the CLI together.

What gets logged where:

- ``augflow.algorithms.max_flow``: run start/end and progress at INFO, one
  line per augmentation at DEBUG. DEBUG output therefore grows with the
  number of augmentations.
- ``augflow.io``: parsed problem sizes at DEBUG.
- ``augflow.cli``: input errors at ERROR, run timings at INFO.
"""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "augflow"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LevelLike = Union[int, str]

_handler_installed = False


def resolve_level(level: LevelLike) -> int:
    """Return the numeric level for ``level``.

    Accepts a level number (``logging.DEBUG``) or a level name in any case
    (``"debug"``, ``"WARNING"``).

    Raises:
        ValueError: If the name is not a known level or the value is not an
            int or str.
    """
    if isinstance(level, bool) or not isinstance(level, (int, str)):
        raise ValueError(f"Log level must be an int or a level name, got {level!r}.")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {level!r}.")
    return value


def cli_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Level selected by the CLI flags; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_root_logger(
    level: LevelLike = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach the package handler to the ``augflow`` logger.

    Only the first call after import (or after ``reset_logging``) has an
    effect; later calls return the logger unchanged.

    Args:
        level: Initial package level, as a number or a name.
        format_string: Record format; ``DEFAULT_FORMAT`` when omitted.
        handler: Handler to install; a stdout ``StreamHandler`` when omitted.

    Returns:
        The ``augflow`` logger.
    """
    global _handler_installed

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler_installed:
        return package_logger

    package_logger.setLevel(resolve_level(level))
    package_logger.handlers.clear()
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)
    # pytest's caplog listens on the root logger.
    package_logger.propagate = True

    _handler_installed = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (usually ``__name__``) deferring to the package level."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: LevelLike) -> int:
    """Set the level of the package logger and its handlers.

    Args:
        level: Level number or name.

    Returns:
        The numeric level applied.
    """
    value = resolve_level(level)
    package_logger = setup_root_logger()
    package_logger.setLevel(value)
    for handler in package_logger.handlers:
        handler.setLevel(value)
    return value


def enable_debug_logging() -> None:
    """Log every augmentation."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Remove the package handler so the next setup starts from scratch."""
    global _handler_installed
    _handler_installed = False

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
