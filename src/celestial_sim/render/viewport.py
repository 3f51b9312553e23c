from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class ViewportState:
    origin: np.ndarray
    scale: float


class Viewport:
    """Maps the fixed model view box into a rectangle of the window.

    The view box is fitted inside the rectangle without distortion and centred
    along the spare axis. Screen y grows downward like model y.
    """

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        view_box: tuple[float, float, float, float],
    ) -> None:
        self._view_box = view_box
        self._rect = rect
        self._state = ViewportState(origin=np.zeros(2, dtype=float), scale=1.0)
        self._fit()

    @property
    def rect(self) -> tuple[int, int, int, int]:
        return self._rect

    @property
    def view_box(self) -> tuple[float, float, float, float]:
        return self._view_box

    @property
    def scale(self) -> float:
        return self._state.scale

    def update_rect(self, rect: tuple[int, int, int, int]) -> None:
        self._rect = rect
        self._fit()

    def _fit(self) -> None:
        left, top, width, height = self._rect
        min_x, min_y, box_w, box_h = self._view_box
        if width <= 0 or height <= 0:
            self._state.scale = 0.0
            self._state.origin[:] = (left, top)
            return
        scale = min(width / box_w, height / box_h)
        offset_x = left + (width - box_w * scale) / 2.0
        offset_y = top + (height - box_h * scale) / 2.0
        self._state.scale = scale
        self._state.origin[:] = (offset_x - min_x * scale, offset_y - min_y * scale)

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        ox, oy = self._state.origin
        return int(round(ox + x * self._state.scale)), int(round(oy + y * self._state.scale))

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        ox, oy = self._state.origin
        scale = max(self._state.scale, 1e-9)
        return (sx - ox) / scale, (sy - oy) / scale

    def length_to_screen(self, length: float) -> int:
        return max(1, int(round(length * self._state.scale)))

    def points_to_screen(self, points: np.ndarray) -> list[tuple[int, int]]:
        screen = np.rint(points * self._state.scale + self._state.origin).astype(int)
        return [(int(px), int(py)) for px, py in screen]
