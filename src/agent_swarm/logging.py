"""Package logging.

Every module logs through ``logging.getLogger(__name__)``; all of those sit
under the ``agent_swarm`` logger configured here. The level comes from the
argument, then ``AGENT_SWARM_LOG_LEVEL``, then WARNING.
"""

import logging
import os
import sys

LOGGER_NAME = "agent_swarm"
LOG_LEVEL_ENV = "AGENT_SWARM_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    sys.stderr.write(f"agent_swarm: unknown log level {name!r}, falling back to WARNING\n")
    return logging.WARNING


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a stderr handler to the package logger and set its level.

    Safe to call repeatedly: the handler is added once and later calls only
    change the level.
    """
    numeric_level = _resolve_level(level or os.environ.get(LOG_LEVEL_ENV) or "WARNING")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
