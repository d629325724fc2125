"""
Logging utilities for the Geo location service adapter.

Provides centralized logging configuration and convenience methods
for consistent logging across the application.
"""

import logging
from pathlib import Path


# Flag to track if logger has been initialized to ensure idempotency
_logger_initialized = False

# SDK loggers that are chatty at INFO/DEBUG
_NOISY_LOGGERS = ("botocore", "boto3", "urllib3")


def initialize_logger(log_level: str = "INFO", log_file: str = "logs/geo.log") -> None:
    """
    Initialize the root logger with console and file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear any existing handlers to prevent duplicates
    root_logger.handlers.clear()

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_initialized = True

    root_logger.info(f"Logger initialized with level {log_level}, file: {log_file}")


def log_debug(message: str) -> None:
    logging.getLogger().debug(message)


def log_info(message: str) -> None:
    logging.getLogger().info(message)


def log_warning(message: str) -> None:
    logging.getLogger().warning(message)


def log_error(message: str) -> None:
    """Log an error message on the root logger."""
    logging.getLogger().error(message)
