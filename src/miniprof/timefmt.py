# MIT License (see LICENSE)
"""
Human-scaled rendering of nanosecond durations.

Every value picks its own unit: seconds, milliseconds and microseconds are
shown with two decimals, anything under a microsecond as whole nanoseconds.
"""
from __future__ import annotations

NS_PER_US: int = 1_000
NS_PER_MS: int = 1_000_000
NS_PER_S: int = 1_000_000_000


def format_time(ns: float) -> str:
    """
    Render a duration given in nanoseconds with its best-fit unit.

    Examples:
        format_time(999)           -> "999 ns"
        format_time(1_000)         -> "1.00 us"
        format_time(2_500_000)     -> "2.50 ms"
        format_time(1_000_000_000) -> "1.00 s"

    Fractional values below one microsecond are truncated, so a mean
    absolute deviation of 66.67 ns renders as "66 ns".

    Raises:
        ValueError: If ns is negative.
    """
    if ns < 0:
        raise ValueError(f"duration must be non-negative, got {ns}")
    if ns >= NS_PER_S:
        return f"{ns / NS_PER_S:.2f} s"
    if ns >= NS_PER_MS:
        return f"{ns / NS_PER_MS:.2f} ms"
    if ns >= NS_PER_US:
        return f"{ns / NS_PER_US:.2f} us"
    return f"{int(ns)} ns"
