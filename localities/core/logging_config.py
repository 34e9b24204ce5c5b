"""Logging configuration."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from datetime import datetime

# Log levels for different components
LOGGING_CONFIG = {
    "localities": logging.INFO,
    "localities.core": logging.INFO,
    "localities.features": logging.INFO,
    "localities.infra": logging.WARNING,

    # Reduce noise from libraries
    "sqlalchemy": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncio": logging.ERROR,
}


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: 36,
        logging.INFO: 32,
        logging.WARNING: 33,
        logging.ERROR: 31,
        logging.CRITICAL: 35,
    }

    def __init__(self, fmt: str, datefmt: str | None = None, use_color: bool = True) -> None:
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        text = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_color or color is None:
            return text
        return text.replace(record.levelname, f"\033[{color}m{record.levelname}\033[0m", 1)


def setup_logging(log_file: bool = False, debug: bool = False, log_dir: Path = Path("logs")) -> None:
    """Configure logging for the localities service."""

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console goes to stderr so CLI output on stdout stays machine readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_formatter = ColoredFormatter(
        "%(asctime)s %(levelname)-8s %(name)s - %(message)s",
        datefmt="%H:%M:%S",
        use_color=sys.stderr.isatty(),
    )
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_filename = log_dir / f"localities_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)

        # Detailed format for file
        file_formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    for logger_name, level in LOGGING_CONFIG.items():
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug and logger_name.startswith("localities") else level)

    logging.getLogger(__name__).debug(
        f"Logging configured (console={'DEBUG' if debug else 'INFO'}, "
        f"file={'ENABLED' if log_file else 'DISABLED'})"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with proper configuration."""
    return logging.getLogger(name)
