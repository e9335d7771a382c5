"""Logging configuration for octdepends.

Logs to stderr so that JSON written to stdout by the CLI stays clean.
"""

import logging
import os
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

# Create logger that outputs to stderr
logger = logging.getLogger("octdepends")
logger.setLevel(os.getenv("OCTDEPENDS_LOG_LEVEL", "INFO").upper())

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "[octdepends] %(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_log_level(level: str | int) -> None:
    """Change the level of the octdepends logger.

    Args:
        level: Level name (e.g. "DEBUG") or numeric level.
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)


class TimingContext:
    """Context object that captures elapsed time from an operation.

    Attributes:
        elapsed: Elapsed time in seconds (set after context exits).
        elapsed_ms: Elapsed time in milliseconds (set after context exits).
    """

    def __init__(self) -> None:
        self.elapsed: float = 0.0
        self.elapsed_ms: float = 0.0
        self._start: float = 0.0

    def start(self) -> None:
        """Start the timer."""
        self._start = time.perf_counter()

    def stop(self) -> None:
        """Stop the timer and record elapsed time."""
        self.elapsed = time.perf_counter() - self._start
        self.elapsed_ms = self.elapsed * 1000


@contextmanager
def log_operation(
    operation: str,
    details: dict[str, Any] | None = None,
) -> Generator[TimingContext, None, None]:
    """Context manager for logging operation start/end with timing.

    Args:
        operation: Name of the operation.
        details: Optional details dict to include in start message.

    Yields:
        TimingContext object with elapsed time after context exits.

    Example:
        with log_operation("resolve_dependencies", {"roots": "main"}) as timing:
            walk()
        print(f"Took {timing.elapsed_ms:.1f}ms")
    """
    details_str = ""
    if details:
        details_str = " " + " ".join(f"{k}={v}" for k, v in details.items())

    logger.info("▶ Starting %s%s", operation, details_str)

    ctx = TimingContext()
    ctx.start()

    try:
        yield ctx
    except Exception as e:
        ctx.stop()
        logger.error("✗ %s failed after %.2fs: %s", operation, ctx.elapsed, e)
        raise
    else:
        ctx.stop()
        logger.info("✓ Completed %s in %.2fs", operation, ctx.elapsed)
