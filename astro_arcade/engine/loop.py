"""Real-time frame driver that feeds wall-clock time to the scheduler."""
from __future__ import annotations

import time
from typing import Callable

from astro_arcade.engine.scheduler import Scheduler


class FrameDriver:
    """Pumps events, advances scheduled simulation callbacks, then renders.

    The simulation cadence is owned by tasks on the scheduler; this driver
    only supplies elapsed time, clamped so a stalled frame cannot trigger a
    long burst of catch-up ticks.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        render: Callable[[], None],
        process_events: Callable[[], None],
        max_frame_time: float = 0.25,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.scheduler = scheduler
        self.render = render
        self.process_events = process_events
        self.max_frame_time = max_frame_time
        self.clock = clock
        self._running = False
        self._last_time = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def step(self) -> float:
        """Run one frame and return the simulated time it covered."""

        now = self.clock()
        frame_time = min(max(0.0, now - self._last_time), self.max_frame_time)
        self._last_time = now
        self.process_events()
        if self._running:
            self.scheduler.advance(frame_time)
            self.render()
        return frame_time

    def run(self) -> None:
        self._running = True
        self._last_time = self.clock()
        while self._running:
            self.step()


__all__ = ["FrameDriver"]
