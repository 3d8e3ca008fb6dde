# MIT License (see LICENSE)
"""
The ordered history of frames for one profiling session.

Frames are only ever appended; the last one is the mutation target for
enter/leave/message calls. History is unbounded unless a retention bound
is given, in which case the oldest frames are evicted first.
"""
from __future__ import annotations
from collections import deque
from typing import Callable, Iterator
import logging
import time

from .frames import FrameRecord

logger = logging.getLogger(__name__)


class RunRecord:
    """
    Sequence of FrameRecords plus a monotonically increasing frame counter.

    Usage:
        run = RunRecord()
        for _ in range(n):
            frame = run.begin_cycle()
            frame.enter("update")
            ...
            frame.leave()

    Args:
        strict: Passed on to every frame (see FrameRecord.strict).
        max_frames: Keep only the newest N frames. None keeps everything.
        clock: Nanosecond clock handed to every frame.
    """

    def __init__(
        self,
        strict: bool = True,
        max_frames: int | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        if max_frames is not None and max_frames <= 0:
            raise ValueError(f"max_frames must be positive, got {max_frames}")
        self.strict = strict
        self.max_frames = max_frames
        self.clock = clock
        self.frame_counter = 0
        self._frames: deque[FrameRecord] = deque(maxlen=max_frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[FrameRecord]:
        return iter(self._frames)

    @property
    def frames(self) -> tuple[FrameRecord, ...]:
        """Retained frames, oldest first."""
        return tuple(self._frames)

    def begin_cycle(self) -> FrameRecord:
        """
        Start a new cycle.

        Closes the current frame and appends a fresh one, which becomes the
        target of all following instrumentation calls.
        """
        if self._frames:
            self._frames[-1].close()
            if self.max_frames is not None and len(self._frames) == self.max_frames:
                logger.debug("evicting frame %d", self._frames[0].index)
        frame = FrameRecord(index=self.frame_counter, strict=self.strict, clock=self.clock)
        self.frame_counter += 1
        self._frames.append(frame)
        return frame

    def current_frame(self) -> FrameRecord:
        """
        Return the frame currently being recorded.

        If no cycle has begun yet an implicit first frame is created, so
        instrumentation before the first cycle boundary still works.
        """
        if not self._frames:
            logger.debug("no cycle begun; creating implicit frame")
            return self.begin_cycle()
        return self._frames[-1]

    def drain(self) -> list[FrameRecord]:
        """
        Remove and return every closed frame.

        The open frame stays in place so segments still in flight are not
        lost. Used for periodic flush-to-report-and-clear.
        """
        if not self._frames:
            return []
        current = self._frames.pop()
        drained = list(self._frames)
        self._frames.clear()
        self._frames.append(current)
        return drained

    def clear(self) -> None:
        """Drop every frame. The frame counter keeps counting."""
        if self._frames:
            self._frames[-1].close()
        self._frames.clear()
