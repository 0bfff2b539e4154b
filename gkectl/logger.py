"""Logging configuration for the gkectl package."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Everything else logs through children of this logger
ROOT_LOGGER = 'gkectl'


def setup_logger(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    max_size_mb: int = 10,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Set up the gkectl logger.

    Console output goes to stderr so that gcloud's own output on stdout stays
    untouched. Calling this again replaces previously installed handlers.

    Args:
        level: The logging level (default: logging.INFO)
        log_file: Optional path of a rotating log file
        max_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser().absolute()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=path,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def level_from_name(name: str) -> int:
    """Translate a level name like ``"debug"`` into a logging level."""
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(settings, debug_mode: bool = False) -> logging.Logger:
    """Configure logging from the ``logging`` settings section; --debug always wins."""
    level = logging.DEBUG if debug_mode else level_from_name(settings.level)
    return setup_logger(
        level=level,
        log_file=settings.file,
        max_size_mb=settings.max_size_mb,
        backup_count=settings.backup_count,
    )
