# MIT License (see LICENSE)
"""
Plain-text report over recorded frames.

Output:
    >-- Frame 0: --<
        * [game.py:42] (physics): 3 calls, mean: 1.20 ms +- 35.10 us, range: 1.15 ms--1.25 ms
        * [game.py:51] (draw): 3 calls, mean: 400.00 us +- 2.00 us, range: 397.00 us--403.00 us

Segments are ranked by total time (count * mean), largest first, with the
key as tie-breaker so the output is deterministic.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, TextIO
import sys

from .frames import FrameRecord
from .timefmt import format_time


@dataclass(frozen=True)
class SegmentRow:
    """Display values for one segment of one frame (times in ns)."""
    key: str
    count: int
    total: float
    mean: float
    mad: float
    min: int
    max: int


def segment_rows(frame: FrameRecord) -> list[SegmentRow]:
    """Summarize every segment of a frame, most expensive first."""
    rows = [
        SegmentRow(
            key=key,
            count=stats.count,
            total=stats.total,
            mean=stats.mean,
            mad=stats.mean_absolute_deviation,
            min=stats.min,
            max=stats.max,
        )
        for key, stats in frame.segments.items()
    ]
    rows.sort(key=lambda r: (-r.total, r.key))
    return rows


def render_frame(frame: FrameRecord, include_messages: bool = False) -> str:
    """
    Render the segment lines of one frame.

    Args:
        frame: Frame to render.
        include_messages: Append posted messages after the segment lines.
    """
    out = []
    for r in segment_rows(frame):
        out.append(
            f"    * {r.key}: {r.count} calls, "
            f"mean: {format_time(r.mean)} +- {format_time(r.mad)}, "
            f"range: {format_time(r.min)}--{format_time(r.max)}\n"
        )
    if include_messages:
        for key, text in frame.messages:
            out.append(f"      > {key}: {text}\n")
    return "".join(out)


def render(frames: Iterable[FrameRecord], include_messages: bool = False) -> str:
    """Render frames (a RunRecord or any sequence of frames) in order."""
    return "".join(
        f">-- Frame {frame.index}: --<\n{render_frame(frame, include_messages)}\n"
        for frame in frames
    )


def write_report(frames: Iterable[FrameRecord], output: TextIO | None = None, include_messages: bool = False) -> None:
    """
    Write the report to a text stream.

    Args:
        frames: RunRecord or frames to report.
        output: Destination stream (defaults to sys.stdout).
        include_messages: See render_frame.
    """
    output = output or sys.stdout
    output.write(render(frames, include_messages))
    output.flush()
