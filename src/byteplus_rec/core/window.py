# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Fixed-size rolling history of probe outcomes."""

from __future__ import annotations

DEFAULT_WINDOW_SIZE = 60


class SlidingWindow:
    """
    Ring buffer of boolean probe outcomes with an O(1) failure rate.

    Every slot starts as a success, so a new host reports a 0% failure
    rate until failures are recorded. The failure count always equals the
    number of ``False`` entries currently in the buffer.

    Only the tracker's tick loop writes to a window. Readers may call
    ``failure_rate`` at any time; they see either the value before or after
    a ``put``.

    Example:
        >>> window = SlidingWindow(4)
        >>> window.put(False)
        >>> window.failure_rate()
        0.25
    """

    def __init__(self, size: int = DEFAULT_WINDOW_SIZE):
        if size < 1:
            raise ValueError("window size must be at least 1")
        self._size = size
        self._items = [True] * size
        self._head = size - 1
        self._tail = 0
        self._failure_count = 0.0

    @property
    def size(self) -> int:
        """Capacity of the window."""
        return self._size

    @property
    def failure_count(self) -> float:
        """Number of failures currently held in the window."""
        return self._failure_count

    def put(self, success: bool) -> None:
        """
        Record one probe outcome, evicting the oldest.

        The insert is counted before the eviction check, and the eviction
        check reads the oldest slot before it is overwritten, so a full
        window of failures reports a rate of exactly 1.0.
        """
        if not success:
            self._failure_count += 1
        self._head = (self._head + 1) % self._size
        if not self._items[self._head]:
            self._failure_count -= 1
        self._items[self._head] = success
        self._tail = (self._head + 1) % self._size

    def failure_rate(self) -> float:
        """Return failures / capacity, in [0, 1]."""
        return self._failure_count / self._size

    def __repr__(self) -> str:
        return (
            f"SlidingWindow(size={self._size}, "
            f"failure_count={self._failure_count:g}, "
            f"failure_rate={self.failure_rate():.3f})"
        )


__all__ = ["DEFAULT_WINDOW_SIZE", "SlidingWindow"]
