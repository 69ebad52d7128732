from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from logging import Logger
from pathlib import Path

LOGGER_NAME = "quizkey"
_EXTRA_FIELDS = ("quiz", "seed", "length", "attempts", "metrics", "error_type")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str)


def setup_logging(
    log_dir: str = "logs",
    filename: str = "quizkey.log",
    level: str = "INFO",
    structured: bool = False,
) -> Logger:
    """Configure dual console/file logging using stdlib logging.

    Creates the logs directory if needed and sets a consistent formatter.
    Multiple calls are safe; handlers are added only once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = Path(log_dir) / filename

    if structured:
        fmt: logging.Formatter = StructuredFormatter()
    else:
        fmt = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # File handler
    fh = logging.FileHandler(str(log_path), encoding="utf-8")
    fh.setLevel(logger.level)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("Logging configured")
    return logger


def reset_logging() -> None:
    """Drop handlers installed by setup_logging (used between CLI runs in tests)."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger._configured = False  # type: ignore[attr-defined]
