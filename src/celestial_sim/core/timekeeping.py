"""Utilities for turning wall-clock frames into simulated days."""
from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

from celestial_sim.data.speeds import DEFAULT_SPEED_LEVEL, SpeedLevel, get_speed_level


@dataclass
class FrameTimer:
    """High resolution frame timestamps based on :func:`time.perf_counter`."""

    origin: float = field(default_factory=time.perf_counter)

    def now_millis(self) -> float:
        return (time.perf_counter() - self.origin) * 1000.0


class SimulationClock:
    """Integrates simulated days from a sequence of frame timestamps.

    The first :meth:`tick` after construction or :meth:`reset` only records the
    reference timestamp. Every later tick advances ``elapsed_days`` by the real
    seconds since the previous tick times the selected speed multiplier, unless
    the clock is paused. Non-positive deltas never move the clock and
    non-finite timestamps are ignored.
    """

    def __init__(self, speed_level: int = DEFAULT_SPEED_LEVEL, *, paused: bool = False) -> None:
        self._level: SpeedLevel = get_speed_level(speed_level)
        self._speed_index = speed_level
        self._paused = paused
        self._elapsed_days = 0.0
        self._last_millis: float | None = None

    @property
    def elapsed_days(self) -> float:
        return self._elapsed_days

    @property
    def speed_level(self) -> int:
        return self._speed_index

    @property
    def speed_multiplier(self) -> float:
        return self._level.days_per_second

    @property
    def speed_label(self) -> str:
        return self._level.label

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def last_millis(self) -> float | None:
        return self._last_millis

    def tick(self, now_millis: float) -> None:
        if not math.isfinite(now_millis):
            return
        if self._last_millis is None:
            self._last_millis = now_millis
            return
        delta_seconds = (now_millis - self._last_millis) / 1000.0
        if not self._paused and delta_seconds > 0.0:
            self._elapsed_days += delta_seconds * self._level.days_per_second
        self._last_millis = now_millis

    def set_speed_level(self, index: int) -> None:
        self._level = get_speed_level(index)
        self._speed_index = index

    def set_paused(self, flag: bool) -> None:
        self._paused = bool(flag)

    def toggle_paused(self) -> bool:
        self._paused = not self._paused
        return self._paused

    def clear_reference(self) -> None:
        self._last_millis = None

    def reset(self) -> None:
        self._elapsed_days = 0.0
        self._last_millis = None


__all__ = ["FrameTimer", "SimulationClock"]
