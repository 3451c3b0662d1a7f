"""
Logging setup shared by all modules.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    """
    Get a module logger with a single stream handler attached.

    Args:
        name: Logger name, usually ``__name__``
        level: Log level name; defaults to ``Settings.LOG_LEVEL``

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(name)
    if level is None:
        from stress_police.core.config import get_settings

        level = get_settings().LOG_LEVEL
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
