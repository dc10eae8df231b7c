"""Route the localization engine's log records to one owned handler.

The engine logs under the ``core`` and ``utils`` packages. Hosts that embed it
usually configure the root logger themselves, so this module never touches the
root logger: it attaches a single named handler to the engine's own loggers
and replaces that handler when called again.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"
HANDLER_NAME = "veil-i18n"
ENGINE_LOGGERS = ("core", "utils")

_DEFAULT_LEVEL = logging.WARNING


def resolve_level(level: int | str | None) -> int:
    """Turn a level name or number into a logging level.

    Raises:
        ValueError: If ``level`` names no known logging level.
    """

    if level is None:
        return _DEFAULT_LEVEL
    if isinstance(level, int):
        return level

    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: int | str | None = None, stream: TextIO | None = None) -> logging.Handler:
    """Send engine log records at ``level`` and above to ``stream``.

    Returns the installed handler. Records stop propagating to the root
    logger so a host's own configuration does not print them twice.
    """

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(resolved)

    for name in ENGINE_LOGGERS:
        engine_logger = logging.getLogger(name)
        for existing in list(engine_logger.handlers):
            if existing.get_name() == HANDLER_NAME:
                engine_logger.removeHandler(existing)
                existing.close()
        engine_logger.addHandler(handler)
        engine_logger.setLevel(resolved)
        engine_logger.propagate = False

    return handler


__all__ = ["ENGINE_LOGGERS", "HANDLER_NAME", "LOG_FORMAT", "configure_logging", "resolve_level"]
