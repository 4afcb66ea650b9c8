"""
FeatherGuard - Logging Configuration
Centralized logging setup for the application.
"""

import logging
import sys
from typing import Optional

from featherguard.core.config import settings

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Request and SQL chatter from client libraries
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure stdout logging and return the "featherguard" logger.

    Args:
        level: Log level name, defaults to LOG_LEVEL from settings
        format_string: Custom format string for log messages

    Returns:
        Package logger
    """
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger = logging.getLogger("featherguard")
    logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
