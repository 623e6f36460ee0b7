"""
Runtime configuration for the Playjoy Livescore backend.
Collects logger setup and the outbound-call tunables in one place.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from . import settings
from .constants import (
    CACHE_DURATION_DEFAULT,
    CACHE_DURATION_EVENTS,
    CACHE_DURATION_LIVE,
    CACHE_DURATION_STANDINGS,
)


API_TIMEOUT = settings.API_TIMEOUT
"""Default timeout (seconds) for football API calls."""

DEFAULT_CACHE_DURATION = int(os.getenv("CACHE_DURATION", CACHE_DURATION_DEFAULT))
"""Default freshness window (seconds) for cached football API responses."""

LIVE_CACHE_DURATION = int(os.getenv("LIVE_CACHE_DURATION", CACHE_DURATION_LIVE))
EVENTS_CACHE_DURATION = int(os.getenv("EVENTS_CACHE_DURATION", CACHE_DURATION_EVENTS))
STANDINGS_CACHE_DURATION = int(os.getenv("STANDINGS_CACHE_DURATION", CACHE_DURATION_STANDINGS))


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "livescore.log")
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
