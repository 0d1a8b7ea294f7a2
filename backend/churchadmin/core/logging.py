"""Logging configuration for the Church Admin backend."""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure and return the application logger.

    The level defaults to the LOG_LEVEL environment variable (INFO when unset).
    """
    logger = logging.getLogger("churchadmin")

    if logger.handlers:
        return logger

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = "churchadmin") -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class LogContext:
    """Context manager for timed, structured logging of a single operation.

    Context keyword arguments are rendered into the message as ``key=value``
    pairs so they survive the plain-text formatter.
    """

    def __init__(self, logger: logging.Logger, operation: str, **context: Any) -> None:
        self.logger = logger
        self.operation = operation
        self.context = context
        self._started: float | None = None
        self.elapsed_ms: int = 0

    def _describe(self) -> str:
        if not self.context:
            return self.operation
        pairs = " ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.operation} [{pairs}]"

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.info(f"Starting {self._describe()}")
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: Any) -> bool:
        self.elapsed_ms = int((time.perf_counter() - (self._started or 0.0)) * 1000)
        if exc_type is not None:
            self.logger.error(
                f"Failed {self._describe()} after {self.elapsed_ms} ms: {exc_val}",
                exc_info=True,
            )
        else:
            self.logger.info(f"Completed {self._describe()} in {self.elapsed_ms} ms")
        return False


# Initialize default logger
logger = setup_logging()
