# MIT License (see LICENSE)
"""Exceptions raised for misuse of the instrumentation calls."""
from __future__ import annotations


class ProfilerError(RuntimeError):
    """Base class for instrumentation contract violations."""


class StackImbalanceError(ProfilerError):
    """leave() or post_message() was called with no segment open."""


class FrameClosedError(ProfilerError):
    """A frame was mutated after a newer frame replaced it."""


class ClockOrderError(ProfilerError):
    """leave() was given an end timestamp earlier than the segment's start."""
