"""Deferred callbacks with cancellation handles, driven by a logical clock."""
from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(order=True)
class ScheduledTask:
    """Handle for a callback queued on a :class:`Scheduler`."""

    due: float
    sequence: int
    callback: Callable[[], None] = field(compare=False, repr=False)
    _cancelled: bool = field(default=False, compare=False)
    _done: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._done)


class Scheduler:
    """Single-threaded cooperative scheduler.

    Time only moves when :meth:`advance` is called, which keeps the
    simulation deterministic under test and lets the frame driver feed it
    wall-clock time in production.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[ScheduledTask] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(
            due=self._now + max(0.0, delay),
            sequence=next(self._sequence),
            callback=callback,
        )
        heapq.heappush(self._queue, task)
        return task

    def advance(self, elapsed: float) -> int:
        """Move the clock forward and run every task that falls due.

        Tasks scheduled by callbacks run in the same call when they fall due
        inside the window. Returns the number of callbacks run.
        """

        target = self._now + max(0.0, elapsed)
        ran = 0
        while self._queue and self._queue[0].due <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = max(self._now, task.due)
            task._done = True
            task.callback()
            ran += 1
        self._now = target
        return ran

    def cancel_all(self) -> None:
        for task in self._queue:
            task.cancel()
        self._queue.clear()

    def pending_count(self) -> int:
        return sum(1 for task in self._queue if task.pending)


__all__ = ["ScheduledTask", "Scheduler"]
