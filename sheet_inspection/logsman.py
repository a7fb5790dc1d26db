"""
Logger factory shared by all inspection components.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    log_filename: Optional[str] = None,
    prefix: str = "sheet_inspection",
    postfix: str = "run",
    log_dir: Optional[str] = None,
    max_log_size: int = 50,
    backup_count: int = 5,
    logging_level: int = logging.INFO,
) -> logging.Logger:
    """Return a configured logger; level and handlers are set only once per name.

    A rotating file handler is added when ``log_dir`` is given. ``max_log_size``
    is in megabytes.
    """
    logger = logging.getLogger(name)
    # Level is fixed by the first caller for this name
    if not logger.handlers:
        logger.setLevel(logging_level)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_dir and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        if log_filename is None:
            log_filename = f"{prefix}_{datetime.now().strftime('%Y%m%d')}_{postfix}.log"
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, log_filename),
            maxBytes=max_log_size * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class LoggerWriter:
    """File-like object that forwards writes to a logger (for stdout/stderr)."""

    def __init__(self, logger: logging.Logger, level: int):
        self.logger = logger
        self.level = level

    def write(self, message: str):
        message = message.rstrip()
        if message:
            self.logger.log(self.level, message)

    def flush(self):
        pass


def level_from_name(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)
