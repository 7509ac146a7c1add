"""
log.py

JSON logging setup for the stake overrides host process.
"""

import logging
import logging.handlers
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach JSON formatted handlers to the ``stake_overrides`` logger.

    Logs always go to stderr; when ``log_file`` is given they also go to a
    rotating file (10 MB, 5 backups). Calling this again replaces the
    handlers installed by a previous call.
    """
    formatter = jsonlogger.JsonFormatter(LOG_FORMAT)

    logger = logging.getLogger("stake_overrides")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=10_000_000,
            backupCount=5,
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
