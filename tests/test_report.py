import io

from miniprof.frames import FrameRecord
from miniprof.report import render, render_frame, segment_rows, write_report
from miniprof.run import RunRecord


def _timed(frame, clock, key, *durations):
    for d in durations:
        frame.enter(key)
        clock.advance(d)
        frame.leave()


def test_end_to_end_alpha(clock):
    run = RunRecord(clock=clock)
    frame = run.begin_cycle()
    _timed(frame, clock, "alpha", 100, 200, 300)

    assert render(run) == (
        ">-- Frame 0: --<\n"
        "    * alpha: 3 calls, mean: 200 ns +- 66 ns, range: 100 ns--300 ns\n"
        "\n"
    )


def test_rows_sorted_by_total_descending(clock):
    frame = FrameRecord(clock=clock)
    _timed(frame, clock, "cheap", 10)
    _timed(frame, clock, "many", 100, 100, 100)   # total 300
    _timed(frame, clock, "big", 250)              # total 250

    assert [r.key for r in segment_rows(frame)] == ["many", "big", "cheap"]


def test_equal_totals_tie_break_on_key(clock):
    frame = FrameRecord(clock=clock)
    _timed(frame, clock, "zeta", 500)
    _timed(frame, clock, "alpha", 250, 250)
    _timed(frame, clock, "mid", 500)

    assert [r.key for r in segment_rows(frame)] == ["alpha", "mid", "zeta"]


def test_units_chosen_per_value(clock):
    frame = FrameRecord(clock=clock)
    _timed(frame, clock, "mixed", 500, 2_000_000_500)

    line = render_frame(frame)
    assert line == (
        "    * mixed: 2 calls, mean: 1.00 s +- 1.00 s, "
        "range: 500 ns--2.00 s\n"
    )


def test_render_is_deterministic(clock):
    run = RunRecord(clock=clock)
    for i in range(3):
        frame = run.begin_cycle()
        _timed(frame, clock, "a", 1_000 * (i + 1))
        _timed(frame, clock, "b", 1_000 * (i + 1))

    first = render(run)
    assert render(run) == first
    assert first.count(">-- Frame") == 3
    assert first.index(">-- Frame 0") < first.index(">-- Frame 1") < first.index(">-- Frame 2")


def test_empty_frame_renders_header_only():
    run = RunRecord()
    run.begin_cycle()
    assert render(run) == ">-- Frame 0: --<\n\n"


def test_messages_optional(clock):
    frame = FrameRecord(clock=clock)
    frame.enter("load")
    frame.post_message("cache miss")
    clock.advance(50)
    frame.leave()

    assert "cache miss" not in render_frame(frame)
    assert render_frame(frame, include_messages=True).endswith("      > load: cache miss\n")


def test_write_report_to_stream(clock):
    run = RunRecord(clock=clock)
    _timed(run.begin_cycle(), clock, "alpha", 1_500)
    buf = io.StringIO()
    write_report(run, buf)
    assert buf.getvalue() == render(run)
    assert "mean: 1.50 us +- 0 ns" in buf.getvalue()
