# MIT License (see LICENSE)
"""
Environment-driven settings.

    MINIPROF_ENABLED     "0" swaps in the no-op engine (default "1").
    MINIPROF_STRICT      "1" raises on unbalanced leave/message, "0" logs and
                         ignores them. Unset follows __debug__, so running
                         under `python -O` is lenient.
    MINIPROF_MAX_FRAMES  keep only the newest N frames (default: keep all).
"""
from __future__ import annotations
import os


def enabled() -> bool:
    """Check if instrumentation is switched on via environment variable."""
    return os.environ.get("MINIPROF_ENABLED", "1") != "0"


def strict() -> bool:
    """Whether stack-imbalance violations should raise instead of being ignored."""
    value = os.environ.get("MINIPROF_STRICT")
    if value is None or value == "":
        return __debug__
    return value == "1"


def max_frames() -> int | None:
    """
    Frame retention bound, or None for unbounded history.

    Raises:
        ValueError: If the variable is set to something other than a
            positive integer.
    """
    value = os.environ.get("MINIPROF_MAX_FRAMES", "").strip()
    if not value:
        return None
    n = int(value)
    if n <= 0:
        raise ValueError(f"MINIPROF_MAX_FRAMES must be positive, got {n}")
    return n
