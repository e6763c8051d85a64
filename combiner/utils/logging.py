"""
Logging configuration for the combiner.

Uses loguru. Console output goes to stderr so that stdout stays clean for
--json and --show-csv output.
"""

import os
import sys
from pathlib import Path

from loguru import logger

from combiner.config import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> list[int]:
    """
    Replace loguru's handlers with the combiner's console and file sinks.

    Args:
        level: Log level; defaults to COMBINER_LOG_LEVEL
        log_file: Optional log file; defaults to COMBINER_LOG_FILE
        rotation: Log rotation setting (e.g., "10 MB", "1 day")
        retention: Log retention setting (e.g., "1 week", "10 files")

    Returns:
        Handler ids of the configured sinks
    """
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    handlers = [
        {
            "sink": sys.stderr,
            "level": level,
            "format": CONSOLE_FORMAT,
            "colorize": sys.stderr.isatty(),
        }
    ]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append({
            "sink": log_file,
            "level": level,
            "format": FILE_FORMAT,
            "rotation": rotation,
            "retention": retention,
            "compression": "gz",
        })

    handler_ids = logger.configure(handlers=handlers)
    logger.debug(f"Logging to stderr{f' and {log_file}' if log_file else ''} at {level}")
    return handler_ids


# Only configure logging if not explicitly disabled
if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
