import sys

import miniprof
from miniprof.engine import ActiveProfiler, NullProfiler


def _line() -> int:
    """Line number of the caller."""
    return sys._getframe(1).f_lineno


def test_keys_carry_call_site(clock):
    miniprof.set_profiler(ActiveProfiler(clock=clock))
    miniprof.frame()
    line = _line() + 1
    miniprof.enter("alpha")
    clock.advance(100)
    miniprof.leave("alpha")

    (key,) = miniprof.get_profiler().current_frame().segments
    assert key.endswith(f"test_default.py:{line}] (alpha)")
    assert key.startswith("[")


def test_scope_and_data(clock):
    miniprof.set_profiler(ActiveProfiler(clock=clock))
    miniprof.frame()
    for d in (100, 200, 300):
        with miniprof.scope("mainloop"):
            clock.advance(d)

    text = miniprof.data()
    assert text.startswith(">-- Frame 0: --<\n")
    assert "(mainloop): 3 calls, mean: 200 ns +- 66 ns, range: 100 ns--300 ns" in text


def test_distinct_call_sites_same_label(clock):
    miniprof.set_profiler(ActiveProfiler(clock=clock))
    with miniprof.scope("step"):
        pass
    with miniprof.scope("step"):
        pass
    assert len(miniprof.get_profiler().current_frame().segments) == 2


def test_message(clock):
    miniprof.set_profiler(ActiveProfiler(clock=clock))
    with miniprof.scope("io"):
        miniprof.message("retrying")
    assert "retrying" in miniprof.data(include_messages=True)


def test_profiled_uses_current_default(clock):
    miniprof.set_profiler(ActiveProfiler(clock=clock))

    @miniprof.profiled()
    def tick():
        clock.advance(5)

    replacement = ActiveProfiler(clock=clock)
    miniprof.set_profiler(replacement)
    tick()
    (stats,) = replacement.current_frame().segments.values()
    assert stats.samples == [5]


def test_disabled_by_environment(monkeypatch):
    monkeypatch.setenv("MINIPROF_ENABLED", "0")
    assert isinstance(miniprof.get_profiler(), NullProfiler)

    miniprof.frame()
    miniprof.enter("x")
    miniprof.message("nothing")
    miniprof.leave()
    with miniprof.scope("y"):
        pass

    def f():
        pass

    assert miniprof.profiled()(f) is f
    assert miniprof.data() == ""


def test_set_profiler_returns_previous():
    first = miniprof.get_profiler()
    second = ActiveProfiler()
    assert miniprof.set_profiler(second) is first
    assert miniprof.get_profiler() is second
    miniprof.reset_profiler()
    assert miniprof.get_profiler() is not second
