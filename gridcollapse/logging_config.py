"""
Centralized logging configuration for gridcollapse.

Provides debug logging to file for all solver operations.
Log file: <data>/debug.log (with rotation)

Usage:
    from gridcollapse.logging_config import setup_logging
    setup_logging(data_root)  # Call once at startup

All gridcollapse.* loggers will write DEBUG to file, WARNING+ to console.
Library use without setup_logging() stays silent apart from Python's
last-resort handler for warnings.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


# Global configuration
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files
ROOT_LOGGER_NAME = "gridcollapse"

_logging_initialized = False


def setup_logging(
    data_root: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for gridcollapse.

    Args:
        data_root: Path to data directory (log file goes here)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    data_path = Path(data_root)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers (for re-initialization)
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"gridcollapse logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_step(
    logger: logging.Logger,
    step: int,
    outcome: str,
    details: str | None = None,
) -> None:
    """Log the outcome of one engine step."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STEP {step:05d} | {outcome}{details_str}")


def log_attempt(
    logger: logging.Logger,
    attempt: int,
    max_attempts: int,
    status: str,
    details: str | None = None,
) -> None:
    """Log a solve attempt starting or finishing."""
    details_str = f" | {details}" if details else ""
    logger.info(f"ATTEMPT {attempt}/{max_attempts} | {status}{details_str}")
