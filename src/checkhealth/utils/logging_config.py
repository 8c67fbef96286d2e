"""
checkhealth Logging Configuration

Provides centralized logging setup. Log records go to stderr so they never
interleave with a report printed on stdout.

Modules log through logging.getLogger(__name__); the process owner calls:
    from checkhealth.utils.logging_config import setup_logging
    setup_logging(level=logging.DEBUG, log_file="~/.cache/checkhealth/run.log")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional
import threading

# Thread-safe initialization
_initialized = False
_lock = threading.Lock()

# Console and file formats
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s | %(name)s:%(lineno)d | %(levelname)s | %(message)s"

LEVEL_COLORS = {
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for terminal output."""

    def __init__(self, fmt=None, datefmt=None, use_colors=True, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record):
        if self.use_colors:
            levelname = record.levelname
            if levelname in LEVEL_COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{LEVEL_COLORS[levelname]}{levelname}{RESET}"
        return super().format(record)


def parse_level(value, default: int = logging.WARNING) -> int:
    """Turn 'debug' / 'INFO' / '10' into a logging level."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    value = str(value).strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    log_format: str = SIMPLE_FORMAT,
    use_colors: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    force: bool = False,
) -> None:
    """
    Configure the root logger with consistent settings.

    Args:
        level: Logging level (default WARNING)
        log_file: Optional file path for logging
        log_format: Console log message format string
        use_colors: Enable colored output in terminal
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
        force: Reconfigure even if already initialized
    """
    global _initialized

    with _lock:
        if _initialized and not force:
            return

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Remove existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter(log_format)
        else:
            console_formatter = logging.Formatter(log_format)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

        # File handler if specified
        if log_file:
            log_path = Path(log_file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                str(log_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
            root_logger.addHandler(file_handler)
            root_logger.setLevel(min(level, logging.DEBUG))

        _initialized = True
