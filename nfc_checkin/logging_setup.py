# =======================================================================================
# nfc_checkin/logging_setup.py - Logging Configuration
# =======================================================================================
import logging
from typing import Optional
from .config import config

LOGGER_NAME = "nfc_checkin"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger once.
    API_DEBUG forces DEBUG regardless of LOG_LEVEL.
    """
    if config.API_DEBUG:
        level = "DEBUG"
    level = (level or config.LOG_LEVEL or "INFO").upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
