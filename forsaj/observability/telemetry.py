"""
Lightweight telemetry helpers.

Nothing is shipped to an external collector; events go to the log and
counters/timings stay in memory so tests can assert instrumentation.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections import deque
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("forsaj.telemetry")

# most recent samples kept per metric
TIMING_HISTORY = 256

_COUNTERS: dict[str, int] = {}
_TIMINGS: dict[str, deque[float]] = {}


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event. Callers must not pass passwords or tokens.

    Side Effects:
        - Writes to logger (info level)
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Increment an in-memory counter and emit a debug log.

    Side Effects:
        - Modifies _COUNTERS dict (in-memory state)
        - Writes to logger (debug level)
    """
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    return _COUNTERS.get(name, 0)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Context manager for timing code blocks.

    Side Effects:
        - Appends to _TIMINGS (bounded per metric, oldest samples dropped)
        - Writes to logger (debug level) with timing
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("timing=%s seconds=%.6f", metric_name, elapsed)
        _TIMINGS.setdefault(metric_name, deque(maxlen=TIMING_HISTORY)).append(elapsed)


def get_timings(metric_name: str) -> list[float]:
    return list(_TIMINGS.get(metric_name, ()))


def reset() -> None:
    """
    Clear all counters and timings (useful for tests).

    Side Effects:
        - Clears _COUNTERS and _TIMINGS (in-memory state)
    """
    _COUNTERS.clear()
    _TIMINGS.clear()
