"""
Counter of node creations currently in flight.
"""

from contextlib import contextmanager
from typing import Iterator


class PendingCreationCounter:
    """
    Shared count of in-flight creation attempts.

    Increment and decrement never straddle an await, so a plain integer is
    consistent under the asyncio scheduler. Use track() around a creation so
    the count is released on every exit path.
    """

    def __init__(self):
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    @contextmanager
    def track(self) -> Iterator[int]:
        self._value += 1
        try:
            yield self._value
        finally:
            self._value -= 1


pending_creations = PendingCreationCounter()
