"""
Logging setup for the shiftcracker command line.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``shiftcracker`` namespace; handlers are attached here, by the CLI.
Console output goes through Rich on stderr so stdout stays reserved for
plaintext. An optional rotating log file can be plain text or JSON lines.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "shiftcracker"


class _JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r}.")
    return level


def configure_logging(
    level: str = "WARNING",
    *,
    log_file: str | Path | None = None,
    json_logs: bool = False,
    max_bytes: int = 10_485_760,
    backup_count: int = 3,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Safe to call more than once; previous handlers are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_level(level))
    logger.propagate = False
    logger.handlers.clear()

    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
        rich_tracebacks=True,
        markup=False,
    )
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            filename=str(path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        if json_logs:
            fh.setFormatter(_JSONFormatter())
        else:
            fh.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%dT%H:%M:%S%z",
                )
            )
        logger.addHandler(fh)

    return logger
