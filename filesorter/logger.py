"""
Logging setup for FileSorter.

Provides the application logger. Output goes to stdout, stderr or a
rotating log file depending on the configured log target. Rotated logs
are kept at log_max_bytes with log_backup_count backups.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from filesorter.config import DEFAULT_CONFIG

LOGGER_NAME = 'FileSorter'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_logger = None
_handler = None


def _build_handler(config):
    target = config.get('log_target', 'stdout')
    if target == 'file':
        log_file = os.path.abspath(config.get('log_file') or DEFAULT_CONFIG['log_file'])
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        return RotatingFileHandler(
            log_file,
            maxBytes=config.get('log_max_bytes', DEFAULT_CONFIG['log_max_bytes']),
            backupCount=config.get('log_backup_count', DEFAULT_CONFIG['log_backup_count']),
            encoding='utf-8'
        )
    if target == 'stderr':
        return logging.StreamHandler(sys.stderr)
    return logging.StreamHandler(sys.stdout)


def setup_logging(config=None):
    """Initialize or reconfigure the application-wide logger.

    Installs exactly one handler for the configured target. Calling this
    again (e.g. after the real config is loaded) replaces the previous
    handler instead of stacking a second one.

    Args:
        config: Configuration dictionary. Defaults are used when None.

    Returns:
        logging.Logger: Configured logger instance.
    """
    global _logger, _handler
    config = config or DEFAULT_CONFIG

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if config.get('debug', False) else logging.INFO
    logger.setLevel(level)

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    handler = _build_handler(config)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    _handler = handler
    _logger = logger
    return logger


def get_logger():
    """Get the application logger, initializing with defaults if necessary.

    Returns:
        logging.Logger: The FileSorter logger instance.
    """
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def log_sort_result(result):
    """Log a structured one-line summary of a handled file event.

    Args:
        result: SortResult returned by FileSorter.on_file_created.
    """
    logger = get_logger()

    msg_lines = [
        f"File: {result.name or result.source}",
        f"Source: {result.source}",
        f"Category: {result.category.value if result.category else 'N/A'}",
        f"Action: {result.action.value}",
    ]
    if result.destination:
        msg_lines.append(f"Destination: {result.destination}")
    if result.error:
        msg_lines.append(f"Error: {result.error}")

    if result.is_fatal:
        logger.error(" | ".join(msg_lines), exc_info=result.error)
    elif result.ok:
        logger.info(" | ".join(msg_lines))
    else:
        logger.warning(" | ".join(msg_lines))
