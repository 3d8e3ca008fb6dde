# MIT License (see LICENSE)
"""
Reader-writer lock.

Any number of readers may hold the lock at once; a writer excludes readers
and other writers. Waiting writers block new readers so a steady stream of
report reads cannot starve instrumentation calls. Not re-entrant.
"""
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator
import threading


class ReaderWriterLock:
    """
    Shared/exclusive lock built on a threading.Condition.

    Usage:
        lock = ReaderWriterLock()
        with lock.read_locked():
            text = render(run)
        with lock.write_locked():
            run.begin_cycle()
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        """Wait until no writer holds or waits for the lock, then share it."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Drop a shared hold; the last reader out wakes waiting writers."""
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Wait until no reader or writer holds the lock, then take it exclusively."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release the exclusive hold and wake every waiter."""
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
