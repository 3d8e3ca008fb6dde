# MIT License (see LICENSE)
"""
Per-frame call stack and segment statistics.

A FrameRecord holds everything measured during one execution cycle:
- The stack of currently open segments with their start timestamps.
- One SegmentStats per segment key that has been left at least once.
- Messages posted while a segment was open, tagged with that segment.

enter() pushes, leave() pops and folds the elapsed time into the popped
key's accumulator. Nested segments are timed independently, so an outer
segment's time includes its children.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging
import time

from .errors import ClockOrderError, FrameClosedError, ProfilerError, StackImbalanceError
from .stats import SegmentStats

logger = logging.getLogger(__name__)


@dataclass
class FrameRecord:
    """
    Call stack and accumulator table for one cycle.

    Attributes:
        index: Ordinal of this frame within its run (0 for the first cycle).
        strict: Raise StackImbalanceError on leave()/post_message() with an
                empty stack. When False the call is logged and ignored.
        clock: Monotonic nanosecond clock used when no explicit timestamp
               is passed.
        stack: Open segments as (key, start_ns), innermost last.
        segments: Accumulators by segment key.
        messages: Posted (key, text) pairs in posting order.
        closed: Set once a newer frame has replaced this one.
    """
    index: int = 0
    strict: bool = True
    clock: Callable[[], int] = field(default=time.perf_counter_ns, repr=False)

    # Internal state
    stack: list[tuple[str, int]] = field(default_factory=list)
    segments: dict[str, SegmentStats] = field(default_factory=dict)
    messages: list[tuple[str, str]] = field(default_factory=list)
    closed: bool = False

    @property
    def depth(self) -> int:
        """Number of enter() calls not yet matched by a leave()."""
        return len(self.stack)

    @property
    def top(self) -> str | None:
        """Key of the innermost open segment, or None."""
        return self.stack[-1][0] if self.stack else None

    def enter(self, key: str, now: int | None = None) -> None:
        """
        Open a segment.

        Args:
            key: Segment identifier.
            now: Start timestamp in ns; read from the clock when omitted.
        """
        self._check_open()
        self.stack.append((key, self.clock() if now is None else now))

    def leave(self, now: int | None = None) -> str | None:
        """
        Close the innermost open segment and record its duration.

        Returns:
            The key that was closed, or None if the stack was empty and the
            frame is lenient.

        Raises:
            StackImbalanceError: If the stack is empty and the frame is strict.
            ClockOrderError: If now precedes the segment start and the frame
                is strict. A lenient frame closes the segment without
                recording a sample.
        """
        self._check_open()
        end = self.clock() if now is None else now
        if not self.stack:
            self._violation("leave() called with no open segment")
            return None
        key, start = self.stack[-1]
        if end < start:
            self._violation(
                f"leave() of {key!r} ends at {end} before its start {start}",
                ClockOrderError,
            )
            self.stack.pop()
            return key
        self.stack.pop()
        self.record(key, end - start)
        return key

    def post_message(self, text: str) -> None:
        """
        Attach a message to the innermost open segment.

        Raises:
            StackImbalanceError: If no segment is open and the frame is strict.
        """
        self._check_open()
        if not self.stack:
            self._violation("post_message() called with no open segment")
            return
        self.messages.append((self.stack[-1][0], text))

    def record(self, key: str, duration: int) -> None:
        """Fold an already measured duration (ns) into the accumulator for key."""
        self._check_open()
        stats = self.segments.get(key)
        if stats is None:
            self.segments[key] = SegmentStats.first(duration)
        else:
            stats.fold(duration)

    def open_segments(self) -> list[str]:
        """Keys still open, outermost first."""
        return [key for key, _ in self.stack]

    def close(self) -> None:
        """Freeze the frame. Segments still open are dropped from the statistics."""
        if self.stack:
            logger.debug(
                "frame %d closed with %d open segment(s): %s",
                self.index, len(self.stack), ", ".join(self.open_segments()),
            )
        self.closed = True

    def _check_open(self) -> None:
        if self.closed:
            raise FrameClosedError(f"frame {self.index} is closed")

    def _violation(self, msg: str, error: type[ProfilerError] = StackImbalanceError) -> None:
        if self.strict:
            raise error(f"{msg} (frame {self.index})")
        logger.warning("%s (frame %d); ignored", msg, self.index)
