import pytest

import miniprof


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from MINIPROF_* variables and the default engine."""
    for name in ("MINIPROF_ENABLED", "MINIPROF_STRICT", "MINIPROF_MAX_FRAMES"):
        monkeypatch.delenv(name, raising=False)
    miniprof.reset_profiler()
    yield
    miniprof.reset_profiler()
