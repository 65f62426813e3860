from __future__ import annotations

"""
Logging Configuration Models.

Holds the immutable settings used to bootstrap the logging subsystem
and the mapping from textual severity names to numeric levels.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the logging subsystem.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records to stderr.
        log_file: Optional path of the rotating log file.
        max_bytes: Size threshold that triggers a rollover.
        backup_count: Number of rotated files kept on disk.
        console_fmt: Record format for the console.
        file_fmt: Record format for the log file.
        datefmt: Timestamp format for the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024  # 1MB
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
