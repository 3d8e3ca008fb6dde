# MIT License (see LICENSE)
"""
miniprof - Frame-based instrumentation for hot loops.

Mark the start and end of named code regions ("segments") inside a
repeating cycle ("frame") and get per-segment call counts, mean, mean
absolute deviation and min/max duration for every frame.

Main entry points:
    - ActiveProfiler: An explicit engine instance.
    - NullProfiler: Drop-in engine that records nothing.
    - make_profiler: Pick one of the two from a flag or the environment.
    - enter/leave/message/frame/data/scope/profiled: Helpers on the
      process-wide default engine, keyed by call site.

Submodules:
    - stats: Running per-segment statistics.
    - frames: Per-frame call stack.
    - run: Frame history.
    - report: Text rendering.
    - config: Environment settings.

Example:
    import miniprof

    prof = miniprof.ActiveProfiler()
    for _ in range(60):
        prof.begin_cycle()
        with prof.scope("physics"):
            scene.step()
    print(prof.report())
"""
import logging

from .errors import ProfilerError, StackImbalanceError, FrameClosedError, ClockOrderError
from .stats import SegmentStats
from .frames import FrameRecord
from .run import RunRecord
from .report import SegmentRow, segment_rows, render, render_frame, write_report
from .timefmt import format_time
from .engine import Profiler, ActiveProfiler, NullProfiler, Scope, make_profiler
from .callsite import callsite_key, function_key
from .default import (
    get_profiler,
    set_profiler,
    reset_profiler,
    enter,
    leave,
    message,
    frame,
    data,
    scope,
    profiled,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Engines
    "Profiler",
    "ActiveProfiler",
    "NullProfiler",
    "Scope",
    "make_profiler",
    # Data model
    "SegmentStats",
    "FrameRecord",
    "RunRecord",
    # Reporting
    "SegmentRow",
    "segment_rows",
    "render",
    "render_frame",
    "write_report",
    "format_time",
    # Keys
    "callsite_key",
    "function_key",
    # Default engine
    "get_profiler",
    "set_profiler",
    "reset_profiler",
    "enter",
    "leave",
    "message",
    "frame",
    "data",
    "scope",
    "profiled",
    # Errors
    "ProfilerError",
    "StackImbalanceError",
    "FrameClosedError",
    "ClockOrderError",
]
