"""Logging configuration for llama-console.

Console output goes to stderr in grey so it stays distinct from the
conversation; an optional file handler keeps a full record under
~/.llama-console/logs/.
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Directory for log files
LOGS_DIR = Path.home() / ".llama-console" / "logs"

GREY = "\033[90m"
RESET = "\033[0m"

# Root logger of the package
PACKAGE_LOGGER = "llama_console"


def get_log_path(when: Optional[datetime] = None) -> Path:
    """Daily log file path, e.g. ~/.llama-console/logs/llama-console_20260101.log"""
    when = when or datetime.now()
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    return LOGS_DIR / f"llama-console_{when.strftime('%Y%m%d')}.log"


def configure_logging(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Attach handlers to the package logger.

    Args:
        debug: Show DEBUG records on stderr (default WARNING).
        log_file: Also append DEBUG records to this file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = []
    logger.propagate = False

    console_level = logging.DEBUG if debug else logging.WARNING
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(f"{GREY}%(message)s{RESET}"))
    logger.addHandler(console)
    level = console_level

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)
        level = logging.DEBUG

    logger.setLevel(level)
    return logger
