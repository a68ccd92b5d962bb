"""
Logging setup shared by the application.
"""

import logging
import sys

from dayplan.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "dayplan", level: int | None = None) -> logging.Logger:
    """
    Create (or fetch) a configured logger.

    Args:
        name: Logger name
        level: Explicit level; defaults to DEBUG when settings.DEBUG is set

    Returns:
        Logger with a single stream handler attached
    """
    if level is None:
        level = logging.DEBUG if get_settings().DEBUG else logging.INFO

    log = logging.getLogger(name)
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.propagate = False
    return log


logger = setup_logger()
