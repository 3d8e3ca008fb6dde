# MIT License (see LICENSE)
"""
Instrumentation engines.

Profiler is the interface instrumented code talks to. Two implementations:
    - ActiveProfiler: records into a RunRecord, safe to share across threads.
    - NullProfiler: does nothing; report() returns "".

make_profiler() picks one, so the on/off decision is made once when the
engine is built instead of at every call site.

Example:
    prof = ActiveProfiler()
    for _ in range(100):
        prof.begin_cycle()
        with prof.scope("update"):
            world.update()
        with prof.scope("draw"):
            world.draw()
    print(prof.report())
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import Callable, ContextManager, TextIO, TypeVar
import functools
import logging
import time

from . import config
from .callsite import function_key
from .frames import FrameRecord
from .locks import ReaderWriterLock
from .report import render
from .run import RunRecord

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


class Profiler(ABC):
    """
    Abstract instrumentation engine.

    Subclasses implement the lifecycle calls; scope() and profiled() are
    built on top of enter() and leave().
    """

    enabled: bool = True

    @abstractmethod
    def enter(self, key: str) -> None:
        """Open a segment in the current frame."""
        ...

    @abstractmethod
    def leave(self) -> str | None:
        """Close the innermost open segment; returns its key."""
        ...

    @abstractmethod
    def post_message(self, text: str) -> None:
        """Attach a message to the innermost open segment."""
        ...

    @abstractmethod
    def begin_cycle(self) -> None:
        """Start a new frame."""
        ...

    @abstractmethod
    def report(self, include_messages: bool = False) -> str:
        """Render every recorded frame as text."""
        ...

    def scope(self, key: str) -> ContextManager:
        """
        Return a context manager that times the enclosed code as one segment.

        leave() runs on every exit path, including exceptions.
        """
        return Scope(self, key)

    def profiled(self, key: str | None = None) -> Callable[[F], F]:
        """
        Decorator timing each call of a function as one segment.

        Args:
            key: Segment key; defaults to the function's definition site
                 and qualified name.
        """
        def wrapper(fn: F) -> F:
            k = key or function_key(fn)

            @functools.wraps(fn)
            def inner(*args, **kwargs):
                with self.scope(k):
                    return fn(*args, **kwargs)

            return inner  # type: ignore[return-value]

        return wrapper


class Scope:
    """enter() on entry, leave() on exit. Exceptions are never suppressed."""

    __slots__ = ("profiler", "key")

    def __init__(self, profiler: Profiler, key: str) -> None:
        self.profiler = profiler
        self.key = key

    def __enter__(self) -> "Scope":
        self.profiler.enter(self.key)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.profiler.leave()


class ActiveProfiler(Profiler):
    """
    Engine that records into a RunRecord.

    Instrumentation calls take the write side of a reader-writer lock and
    reports take the read side, so one instance can be shared by several
    threads. They then share one call stack as well; give each thread its
    own instance if their segments interleave.

    Args:
        strict: Raise on leave()/post_message() with nothing open. None reads
                MINIPROF_STRICT (see config.strict).
        max_frames: Retention bound. None reads MINIPROF_MAX_FRAMES.
        clock: Nanosecond clock, injectable for tests.
    """

    def __init__(
        self,
        strict: bool | None = None,
        max_frames: int | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.strict = config.strict() if strict is None else strict
        if max_frames is None:
            max_frames = config.max_frames()
        self.clock = clock
        self.run = RunRecord(strict=self.strict, max_frames=max_frames, clock=clock)
        self._lock = ReaderWriterLock()

    def enter(self, key: str) -> None:
        with self._lock.write_locked():
            self.run.current_frame().enter(key)

    def leave(self) -> str | None:
        # Read the clock before waiting on the lock so contention is not
        # billed to the segment.
        now = self.clock()
        with self._lock.write_locked():
            frame = self.run.current_frame()
            # Another thread may have entered a segment after the clock read.
            if frame.stack and frame.stack[-1][1] > now:
                now = self.clock()
            return frame.leave(now)

    def post_message(self, text: str) -> None:
        with self._lock.write_locked():
            self.run.current_frame().post_message(text)

    def begin_cycle(self) -> None:
        with self._lock.write_locked():
            self.run.begin_cycle()

    def record(self, key: str, duration: int) -> None:
        """Fold a duration measured elsewhere into the current frame."""
        with self._lock.write_locked():
            self.run.current_frame().record(key, duration)

    @property
    def frame_counter(self) -> int:
        with self._lock.read_locked():
            return self.run.frame_counter

    def current_frame(self) -> FrameRecord:
        """The frame being recorded. Mutate it only through this engine."""
        with self._lock.write_locked():
            return self.run.current_frame()

    def report(self, include_messages: bool = False) -> str:
        with self._lock.read_locked():
            return render(self.run, include_messages)

    def flush(self, output: TextIO | None = None, include_messages: bool = False) -> str:
        """
        Report and drop every completed frame.

        The frame in progress is kept. The rendered text is written to
        output when given and returned either way.
        """
        with self._lock.write_locked():
            frames = self.run.drain()
        text = render(frames, include_messages)
        logger.debug("flushed %d frame(s)", len(frames))
        if output is not None:
            output.write(text)
            output.flush()
        return text

    def clear(self) -> None:
        """Forget every recorded frame."""
        with self._lock.write_locked():
            self.run.clear()


_NULL_SCOPE = nullcontext()


class NullProfiler(Profiler):
    """
    Engine that does nothing.

    Lets instrumented code ship with profiling switched off.
    """

    enabled = False

    def enter(self, key: str) -> None:
        pass

    def leave(self) -> str | None:
        return None

    def post_message(self, text: str) -> None:
        pass

    def begin_cycle(self) -> None:
        pass

    def report(self, include_messages: bool = False) -> str:
        return ""

    def scope(self, key: str) -> ContextManager:
        return _NULL_SCOPE

    def profiled(self, key: str | None = None) -> Callable[[F], F]:
        return lambda fn: fn


def make_profiler(enabled: bool | None = None, **kwargs) -> Profiler:
    """
    Build the engine selected by enabled (MINIPROF_ENABLED when None).

    Extra keyword arguments go to ActiveProfiler and are ignored when
    profiling is off.
    """
    if enabled is None:
        enabled = config.enabled()
    if not enabled:
        return NullProfiler()
    return ActiveProfiler(**kwargs)

