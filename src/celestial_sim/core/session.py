"""Animation session owning the clock and the per-frame registration."""
from __future__ import annotations

import logging
from typing import Protocol

from . import orbit
from .model import OrbitalState
from .timekeeping import SimulationClock


logger = logging.getLogger(__name__)


class FrameListener(Protocol):
    def on_frame(self, state: OrbitalState) -> None: ...

    def on_control(self, kind: str, details: str, state: OrbitalState) -> None: ...


class AnimationSession:
    """Drives one :class:`SimulationClock` from a host frame loop.

    Use it as a context manager: entering resets the clock and registers the
    session for frames, leaving always unregisters it and closes listeners,
    also when the block raises.
    """

    def __init__(
        self,
        clock: SimulationClock | None = None,
        *,
        rotation_enabled: bool = True,
    ) -> None:
        self.clock = clock if clock is not None else SimulationClock()
        self._rotation_enabled = rotation_enabled
        self._listeners: list[FrameListener] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def rotation_enabled(self) -> bool:
        return self._rotation_enabled

    @property
    def state(self) -> OrbitalState:
        return orbit.evaluate(self.clock.elapsed_days, self._rotation_enabled)

    def add_listener(self, listener: FrameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: FrameListener) -> None:
        self._listeners.remove(listener)

    def start(self) -> None:
        if self._running:
            return
        self.clock.reset()
        self._running = True
        logger.info(
            "Session started at %s (speed %s)", orbit.START_DATE, self.clock.speed_label
        )

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self.clock.clear_reference()
        listeners, self._listeners = self._listeners, []
        first_error: Exception | None = None
        for listener in listeners:
            close = getattr(listener, "close", None)
            if close is None:
                continue
            try:
                close()
            except Exception as exc:
                logger.exception("Closing listener %r failed", listener)
                if first_error is None:
                    first_error = exc
        logger.info("Session stopped after %.2f simulated days", self.clock.elapsed_days)
        if first_error is not None:
            raise first_error

    def __enter__(self) -> "AnimationSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool | None:
        self.stop()
        return None

    def on_frame(self, now_millis: float) -> OrbitalState:
        if not self._running:
            raise RuntimeError("Animation session is not running")
        self.clock.tick(now_millis)
        state = self.state
        for listener in self._listeners:
            listener.on_frame(state)
        return state

    def set_speed_level(self, index: int) -> None:
        self.clock.set_speed_level(index)
        self._notify_control("speed", self.clock.speed_label)

    def set_paused(self, flag: bool) -> None:
        flag = bool(flag)
        if flag == self.clock.paused:
            return
        self.clock.set_paused(flag)
        self._notify_control("pause" if flag else "resume", "")

    def toggle_paused(self) -> bool:
        self.set_paused(not self.clock.paused)
        return self.clock.paused

    def set_rotation_enabled(self, flag: bool) -> None:
        flag = bool(flag)
        if flag == self._rotation_enabled:
            return
        self._rotation_enabled = flag
        self._notify_control("rotation", "on" if flag else "off")

    def toggle_rotation(self) -> bool:
        self.set_rotation_enabled(not self._rotation_enabled)
        return self._rotation_enabled

    def _notify_control(self, kind: str, details: str) -> None:
        logger.info("Control %s %s", kind, details)
        state = self.state
        for listener in self._listeners:
            listener.on_control(kind, details, state)


__all__ = ["AnimationSession", "FrameListener"]
