#!/usr/bin/env python3
"""Utility functions for github-to-clubhouse."""

import threading
from contextlib import contextmanager
from typing import Iterator


class SubmissionGate:
    """Bounds how many API submissions may be in flight at once.

    Clubhouse rejects concurrent story creation beyond a small ceiling, so
    the importer runs with a single slot.
    """

    def __init__(self, max_in_flight: int = 1):
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self.max_in_flight = max_in_flight
        self._slots = threading.BoundedSemaphore(max_in_flight)

    @contextmanager
    def slot(self) -> Iterator[None]:
        """Hold one submission slot for the duration of the block."""
        self._slots.acquire()
        try:
            yield
        finally:
            self._slots.release()


def replace_colons(name: str) -> str:
    """Clubhouse label names may not contain ':'."""
    return name.replace(":", "_")


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
