# MIT License (see LICENSE)
"""
Segment keys derived from source locations.

A key has the form "[path/to/file.py:42] (label)", which keeps keys from
different call sites apart even when they share a label. Two call sites
on the same line with the same label still collide; callers that need
them apart must pick distinct labels.
"""
from __future__ import annotations
from typing import Callable
import inspect
import os
import sys


def _display_path(filename: str) -> str:
    """Path relative to the working directory when below it, else unchanged."""
    try:
        cwd = os.getcwd()
        absolute = os.path.abspath(filename)
    except OSError:
        return filename
    if absolute.startswith(cwd + os.sep):
        return os.path.relpath(absolute, cwd)
    return filename


def format_key(filename: str, lineno: int, label: str) -> str:
    return f"[{_display_path(filename)}:{lineno}] ({label})"


def callsite_key(label: str, depth: int = 1) -> str:
    """
    Build a key from the caller's source location.

    Args:
        label: Short description of the segment.
        depth: Stack frames to skip; 1 is the direct caller of this function.
    """
    frame = sys._getframe(depth)
    return format_key(frame.f_code.co_filename, frame.f_lineno, label)


def function_key(fn: Callable, label: str | None = None) -> str:
    """Key for a function: its definition line and, by default, its qualified name."""
    fn = inspect.unwrap(fn)
    code = getattr(fn, "__code__", None)
    name = label or getattr(fn, "__qualname__", repr(fn))
    if code is None:
        return f"[?] ({name})"
    return format_key(code.co_filename, code.co_firstlineno, name)
