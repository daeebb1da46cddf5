"""Time utilities shared by the store and the feed engine."""

import time


def now_ms() -> int:
    """Return the current wall-clock instant in epoch milliseconds."""
    return time.time_ns() // 1_000_000
