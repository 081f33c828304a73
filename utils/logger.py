"""
Centralized logging configuration with color-coded console output.
Provides consistent logging across the evaluation tool.
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from datetime import datetime

from config import LOGGING_CONFIG, get_log_dir


# ANSI color codes for terminal output
class LogColors:
    """ANSI color codes for different log levels."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    # Log level colors
    DEBUG = '\033[36m'      # Cyan
    INFO = '\033[32m'       # Green
    WARNING = '\033[33m'    # Yellow
    ERROR = '\033[31m'      # Red
    CRITICAL = '\033[35m'   # Magenta

    # Component colors
    TIME = '\033[90m'       # Gray
    NAME = '\033[34m'       # Blue
    SEPARATOR = '\033[90m'  # Gray


def _level_format(color: str, label: str, message_color: str = "") -> str:
    reset_message = LogColors.RESET if message_color else ""
    return (
        f"{LogColors.TIME}%(asctime)s{LogColors.RESET} "
        f"{color}{label}{LogColors.RESET} "
        f"{LogColors.NAME}%(name)s{LogColors.RESET} "
        f"{LogColors.SEPARATOR}│{LogColors.RESET} "
        f"{message_color}%(message)s{reset_message}"
    )


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color-coded output for console."""

    FORMATS = {
        logging.DEBUG: _level_format(LogColors.DEBUG, "[DEBUG]"),
        logging.INFO: _level_format(LogColors.INFO, "[INFO] "),
        logging.WARNING: _level_format(LogColors.WARNING, "[WARN] ", LogColors.WARNING),
        logging.ERROR: _level_format(LogColors.ERROR, "[ERROR]", LogColors.ERROR),
        logging.CRITICAL: _level_format(
            LogColors.CRITICAL + LogColors.BOLD,
            "[CRITICAL]",
            LogColors.CRITICAL + LogColors.BOLD
        ),
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, self.FORMATS[logging.INFO])
        formatter = logging.Formatter(log_fmt, datefmt='%Y-%m-%d %H:%M:%S')
        return formatter.format(record)


class PlainFormatter(logging.Formatter):
    """Plain formatter without colors for file output."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)-8s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


class MaxLevelFilter(logging.Filter):
    """Only pass records strictly below a level."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record):
        return record.levelno < self.max_level


def setup_logger(
    name: str = None,
    log_dir: Path = None,
    console_level: int = None,
    file_level: int = None,
    log_to_file: bool = None
) -> logging.Logger:
    """
    Set up a logger with colored console output and file logging.

    Records below ERROR go to stdout, ERROR and above go to stderr.

    Args:
        name: Logger name (defaults to root logger if None)
        log_dir: Directory for log files (defaults to config log dir)
        console_level: Logging level for console output
        file_level: Logging level for file output
        log_to_file: Whether to log to file (defaults to config)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    if console_level is None:
        console_level = logging.getLevelName(LOGGING_CONFIG["console_level"])
        if not isinstance(console_level, int):
            console_level = logging.INFO
    if file_level is None:
        file_level = logging.getLevelName(LOGGING_CONFIG["file_level"])
    if log_to_file is None:
        log_to_file = LOGGING_CONFIG["log_to_file"]

    logger.setLevel(logging.DEBUG)  # Capture all levels, handlers will filter

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(console_level)
    stdout_handler.addFilter(MaxLevelFilter(logging.ERROR))
    stdout_handler.setFormatter(ColoredFormatter())
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(max(console_level, logging.ERROR))
    stderr_handler.setFormatter(ColoredFormatter())
    logger.addHandler(stderr_handler)

    # File handler (rotating) without colors
    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        # Use date-based log file naming
        log_file = log_dir / LOGGING_CONFIG["file_name"].format(
            date=datetime.now().strftime('%Y%m%d')
        )

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOGGING_CONFIG["max_bytes"],
            backupCount=LOGGING_CONFIG["backup_count"],
            encoding='utf-8'
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(PlainFormatter())
        logger.addHandler(file_handler)

    # Named loggers stay out of the root logger to avoid duplicate logs
    if name:
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    root = logging.getLogger()
    if not root.handlers:
        setup_logger()

    return logging.getLogger(name)
