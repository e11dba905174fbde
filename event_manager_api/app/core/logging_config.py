"""
Logging configuration for the application.

``setup_logging`` attaches handlers to the ``event_manager_api``
package logger rather than the root logger, so the server's own
loggers (uvicorn, the test runner) keep their configuration.  Level
and optional log file come from ``Settings``; ``DEBUG=true`` forces
debug output regardless of ``LOG_LEVEL``.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import Settings, settings

PACKAGE_LOGGER = "event_manager_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so repeated calls do not stack them.
_HANDLER_PREFIX = "event_manager."


def resolve_level(config: Settings) -> int:
    if config.debug:
        return logging.DEBUG
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Optional[Settings] = None, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Configure the package logger from ``config`` and return it.

    Calling it again replaces the handlers installed by a previous call,
    so a changed log file or level takes effect.
    """
    config = config or settings
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if handler.get_name().startswith(_HANDLER_PREFIX):
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(resolve_level(config))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_PREFIX + "console")
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8")
        file_handler.set_name(_HANDLER_PREFIX + "file")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
