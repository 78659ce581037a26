"""Deferred-call queue driven by the host's event loop."""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable
from typing import Protocol


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...

    def cancel_all(self) -> None: ...


class DeferredQueue:
    """Holds callbacks until their delay has elapsed.

    Nothing runs on its own: the host calls :meth:`run_due` from its input
    loop, so every callback executes on the same thread as every other
    game event.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._seq = itertools.count()
        self._heap: list[tuple[float, int, Callable[[], None]]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        due = self._clock() + max(0.0, delay)
        heapq.heappush(self._heap, (due, next(self._seq), callback))

    def cancel_all(self) -> None:
        self._heap.clear()

    def run_due(self) -> int:
        """Run every callback whose time has come.  Returns how many ran."""
        ran = 0
        now = self._clock()
        while self._heap and self._heap[0][0] <= now:
            _, _, callback = heapq.heappop(self._heap)
            callback()
            ran += 1
        return ran

    @property
    def pending(self) -> int:
        return len(self._heap)

    def time_until_next(self) -> float | None:
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self._clock())
