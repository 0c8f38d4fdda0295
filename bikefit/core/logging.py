"""Logging setup and request/fit log helpers.

Every module logs through ``logging.getLogger(__name__)``; since all of them
live under the ``bikefit`` package they share the handler installed here.
"""

import logging
import sys
from typing import Any

LOGGER_NAME = "bikefit"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the package logger and set its level."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Reconfiguring only changes the level
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def _format_fields(fields: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


def log_request(method: str, path: str, **fields: Any) -> None:
    logger.info(f"REQUEST {method} {path} {_format_fields(fields)}".strip())


def log_response(method: str, path: str, status: int, duration_ms: float) -> None:
    """Log a finished request; client and server errors log as warnings."""
    level = logging.WARNING if status >= 400 else logging.INFO
    logger.log(level, f"RESPONSE {method} {path} status={status} duration_ms={duration_ms:.2f}")


def log_fit(kind: str, **fields: Any) -> None:
    """Summarise a computed recommendation, e.g. ``log_fit("v1", stem=90)``."""
    logger.info(f"FIT {kind} {_format_fields(fields)}".strip())


def log_error(message: str, exc: Exception | None = None, **fields: Any) -> None:
    logger.error(f"ERROR {message} {_format_fields(fields)}".strip(), exc_info=exc)
