"""Logging for rowedit.

All modules log through ``logger``. Nothing is configured on import;
``rowedit --debug`` calls setup_debug_logging() to print to stderr and turn
on the PERF lines for export and HTML rendering.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps

# Set by setup_debug_logging(); perf_timer is a no-op while False
DEBUG_PERF = False

logger = logging.getLogger("rowedit")


def setup_debug_logging(perf: bool = True) -> None:
    """Send debug output to stderr.

    Args:
        perf: Also log timings from perf_timer and log_perf.
    """
    global DEBUG_PERF
    DEBUG_PERF = perf

    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@contextmanager
def perf_timer(operation: str, row_count: int | None = None):
    """Log how long the block took, e.g. ``PERF: render (12 rows) 1.30ms``."""
    if not DEBUG_PERF:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        rows = f" ({row_count} rows)" if row_count is not None else ""
        logger.debug(f"PERF: {operation}{rows} {(time.perf_counter() - start) * 1000:.2f}ms")


def log_perf(func: Callable) -> Callable:
    """Time every call of ``func`` with perf_timer."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        with perf_timer(func.__qualname__):
            return func(*args, **kwargs)

    return wrapper
