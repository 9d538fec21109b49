"""
Logging setup for Facade Energy.

Console output is coloured by level when attached to a terminal; an optional
daily log file receives one JSON object per record. Both append any analysis
context passed through `extra` (building_id, city, season).

Usage:
    from facade_energy.utils.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Analyzing design", extra={"building_id": "123", "city": "Mumbai"})

Level and file output come from settings (FACADE_LOG_LEVEL, FACADE_LOG_TO_FILE,
FACADE_LOG_DIR) unless passed explicitly.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.config import settings

CONTEXT_KEYS = ("building_id", "city", "season")

# Chatty client libraries used by the store, cache and API layers
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "urllib3", "uvicorn.access")


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)}


def _level(name: Optional[str]) -> int:
    return getattr(logging, (name or settings.log_level).upper(), logging.INFO)


class FacadeFormatter(logging.Formatter):
    """Console formatter: level colours plus a [key=value] context suffix."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        context = _context(record)
        if context:
            line += " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"

        if not self.use_colors:
            return line
        return f"{self.LEVEL_COLORS.get(record.levelno, '')}{line}{self.RESET}"


class FileFormatter(logging.Formatter):
    """One JSON object per line for log files."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: Optional[str] = None,
    log_to_file: bool = False,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the root logger.

    Replaces any handlers already installed, so it is safe to call again
    with a different level.

    Args:
        level: Level name (default: settings.log_level)
        log_to_file: Also write JSON lines to a file
        log_file: Explicit log file path
        log_dir: Directory for the dated default file (default: settings.log_dir)
    """
    console_level = _level(level)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if log_to_file else console_level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(FacadeFormatter())
    root.addHandler(console)

    if log_to_file:
        if log_file:
            path = Path(log_file)
        else:
            directory = Path(log_dir or settings.log_dir)
            path = directory / f"facade_energy_{datetime.now():%Y%m%d}.log"
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; use with __name__."""
    return logging.getLogger(name)


_configured = False


def ensure_logging(level: Optional[str] = None, log_to_file: Optional[bool] = None) -> None:
    """Configure logging once per process (API startup, CLI entry)."""
    global _configured
    if _configured:
        return
    setup_logging(
        level=level,
        log_to_file=settings.log_to_file if log_to_file is None else log_to_file,
    )
    _configured = True
