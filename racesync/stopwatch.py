"""Stopwatch transition logic for a single session.

Time is read from a clock callable returning milliseconds. Elapsed time
is derived from ``now - start_time`` instead of being sampled, so every
client can compute the same running value from the broadcast
``start_time``.
"""
from __future__ import annotations

import time
from typing import Callable, List, Optional

from .schemas import Lap, StopwatchState

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    return time.time() * 1000


class Stopwatch:
    """``Stopped(elapsed)`` / ``Running(start_time)`` state machine.

    Invariant: ``is_running`` holds exactly when ``start_time`` is set.
    """

    def __init__(self, clock: Clock = wall_clock_ms):
        self._clock = clock
        self.is_running: bool = False
        self.start_time: Optional[float] = None
        self.elapsed_time: float = 0
        self.laps: List[Lap] = []

    def current_elapsed(self) -> float:
        """Effective elapsed time: live while running, frozen while stopped."""
        if self.is_running and self.start_time is not None:
            return self._clock() - self.start_time
        return self.elapsed_time

    # -------------------- Transitions -------------------- #

    def start(self) -> bool:
        if self.is_running:
            return False
        # Back-date the start so a resumed run keeps its accumulated time.
        self.start_time = self._clock() - self.elapsed_time
        self.is_running = True
        return True

    def stop(self) -> bool:
        if not self.is_running or self.start_time is None:
            return False
        self.elapsed_time = self._clock() - self.start_time
        self.start_time = None
        self.is_running = False
        return True

    def reset(self) -> None:
        self.is_running = False
        self.start_time = None
        self.elapsed_time = 0
        self.laps = []

    def lap(self) -> Optional[Lap]:
        if not self.is_running or self.start_time is None:
            return None
        lap = Lap(number=len(self.laps) + 1, time=self._clock() - self.start_time)
        self.laps.append(lap)
        return lap

    def snapshot(self) -> StopwatchState:
        return StopwatchState(
            is_running=self.is_running,
            start_time=self.start_time,
            elapsed_time=self.elapsed_time,
            laps=[lap.model_copy() for lap in self.laps],
        )


__all__ = ["Clock", "Stopwatch", "wall_clock_ms"]
