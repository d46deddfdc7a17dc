"""
Logging setup for the Fair Value Advisor.

Modules log through `get_logger(__name__)`. An application configures the
handlers once, usually through `fairvalue.config.configure()`, which reads
FAIRVALUE_LOG_LEVEL and FAIRVALUE_LOG_FILE.

Usage:
    from fairvalue.logging_config import get_logger, setup_logging

    setup_logging(level="DEBUG", log_file="logs/valuation.log")

    logger = get_logger(__name__)
    logger.info("Valuing %s", symbol)
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Batch evaluations run on pool threads, so the file log names the thread
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries whose INFO output is noise next to valuation logs
QUIET_LOGGERS = ("pandas", "asyncio")

_logging_configured = False


class ColoredFormatter(logging.Formatter):
    """Colors the level name for terminal output."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.COLORS.get(record.levelno, self.RESET)
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def level_number(level: str) -> int:
    """Numeric value of a level name; unknown names raise ValueError."""
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {LOG_LEVELS}")
    return getattr(logging, name)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    colored: bool = True,
) -> None:
    """
    Install console (and optionally file) handlers on the root logger.

    Args:
        level: Logging level name
        log_file: Path of a log file; its directory is created. None logs
                  to the console only.
        colored: Color level names when stderr is a terminal
    """
    global _logging_configured

    numeric_level = level_number(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    if colored and sys.stderr.isatty():
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, LOG_DATE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Falls back to a basic INFO console setup if `setup_logging` has not run.
    """
    if not _logging_configured:
        logging.basicConfig(
            level=logging.INFO,
            format=CONSOLE_FORMAT,
            datefmt=LOG_DATE_FORMAT,
        )

    return logging.getLogger(name)
