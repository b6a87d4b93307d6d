"""
Logging configuration with daily file rotation.
Rotated files are kept for LOG_RETENTION_DAYS days.
"""
import os
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from config import Config


LOG_FILE_NAME = "celebration.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_RETENTION_DAYS = 10


def _resolve_level(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)


def setup_logger(
    name: str = "app",
    level: Optional[int] = None,
    logs_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logger with file rotation and console output.

    Args:
        name: Logger name
        level: Logging level (default: Config.LOG_LEVEL)
        logs_dir: Directory for log files (default: Config.LOGS_DIR)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if level is None:
        level = _resolve_level(Config.LOG_LEVEL)
    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", "%H:%M:%S")
    )
    logger.addHandler(console_handler)

    directory = logs_dir or Config.LOGS_DIR
    try:
        os.makedirs(directory, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            os.path.join(directory, LOG_FILE_NAME),
            when="midnight",
            interval=1,
            backupCount=LOG_RETENTION_DAYS,
            encoding="utf-8",
            utc=True,
        )
    except OSError as e:
        logger.warning(f"File logging disabled, cannot write to {directory}: {e}")
    else:
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (if None, returns the root app logger)

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("app")
    return logging.getLogger(f"app.{name}")


# Create default application logger
app_logger = setup_logger("app")
