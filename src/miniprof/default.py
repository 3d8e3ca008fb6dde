# MIT License (see LICENSE)
"""
Process-wide default engine and call-site helpers.

The helpers key every segment by the caller's file, line and a label,
e.g. "[game/loop.py:88] (physics)". The engine is built from the
environment on first use (see config) and can be replaced with
set_profiler(), e.g. per test.

Usage:
    import miniprof

    for _ in range(100):
        miniprof.frame()
        with miniprof.scope("mainloop"):
            miniprof.enter("alpha")
            work()
            miniprof.leave()
    print(miniprof.data())

When the default engine is a NullProfiler the helpers return right away
without inspecting the call stack.
"""
from __future__ import annotations
from typing import Callable, ContextManager
import functools
import logging
import threading

from .callsite import callsite_key, function_key
from .engine import Profiler, make_profiler

logger = logging.getLogger(__name__)

_profiler: Profiler | None = None
_init_lock = threading.Lock()


def get_profiler() -> Profiler:
    """Return the default engine, building it from the environment if needed."""
    global _profiler
    if _profiler is None:
        with _init_lock:
            if _profiler is None:
                _profiler = make_profiler()
                logger.debug("default profiler: %s", type(_profiler).__name__)
    return _profiler


def set_profiler(profiler: Profiler) -> Profiler | None:
    """Install profiler as the default engine; returns the previous one."""
    global _profiler
    with _init_lock:
        previous, _profiler = _profiler, profiler
    return previous


def reset_profiler() -> None:
    """Drop the default engine; the next call rebuilds it from the environment."""
    global _profiler
    with _init_lock:
        _profiler = None


def enter(label: str) -> None:
    """Open a segment keyed by the caller's location and label."""
    p = get_profiler()
    if p.enabled:
        p.enter(callsite_key(label, depth=2))


def leave(label: str | None = None) -> str | None:
    """
    Close the innermost open segment.

    label is accepted for readability at the call site and is not checked
    against the segment being closed.
    """
    return get_profiler().leave()


def message(text: str) -> None:
    """Attach text to the innermost open segment."""
    get_profiler().post_message(text)


def frame() -> None:
    """Mark a cycle boundary."""
    get_profiler().begin_cycle()


def data(include_messages: bool = False) -> str:
    """The report for everything recorded so far ("" when disabled)."""
    return get_profiler().report(include_messages)


def scope(label: str) -> ContextManager:
    """Context manager timing the enclosed block under the caller's location."""
    p = get_profiler()
    if not p.enabled:
        return p.scope(label)
    return p.scope(callsite_key(label, depth=2))


def profiled(label: str | None = None) -> Callable:
    """
    Decorator timing every call of a function.

    If the default engine is disabled when the function is decorated, the
    function is returned unchanged.
    """
    def wrapper(fn):
        if not get_profiler().enabled:
            return fn
        key = function_key(fn, label)

        @functools.wraps(fn)
        def inner(*args, **kwargs):
            with get_profiler().scope(key):
                return fn(*args, **kwargs)

        return inner

    return wrapper
