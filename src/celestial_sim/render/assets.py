from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, TYPE_CHECKING

import pygame

if TYPE_CHECKING:  # pragma: no cover
    from celestial_sim.core.config import RenderCfg


Color = tuple[int, int, int] | tuple[int, int, int, int]


def _mix(a: tuple[int, int, int], b: tuple[int, int, int], t: float) -> tuple[int, int, int]:
    return (
        int(a[0] + (b[0] - a[0]) * t),
        int(a[1] + (b[1] - a[1]) * t),
        int(a[2] + (b[2] - a[2]) * t),
    )


class AssetLibrary:
    """Cache for procedurally generated render assets."""

    def __init__(self, render_cfg: RenderCfg) -> None:
        self._cfg = render_cfg
        self._sun_cache: dict[int, pygame.Surface] = {}

    def get_sun_sprite(self, radius: int) -> pygame.Surface:
        """Sun disc with a radial gradient and a soft glow around it."""

        if radius <= 0:
            raise ValueError("Sun sprite radius must be positive")
        cached = self._sun_cache.get(radius)
        if cached is not None:
            return cached

        cfg = self._cfg
        glow_radius = max(radius + 1, int(radius * cfg.sun_glow_radius_factor))
        size = glow_radius * 2
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        center = (glow_radius, glow_radius)

        glow_steps = max(1, glow_radius - radius)
        for step in range(glow_steps):
            r = glow_radius - step
            alpha = int(cfg.sun_glow_alpha * (step + 1) / glow_steps)
            pygame.draw.circle(sprite, (*cfg.sun_glow_color, alpha), center, r)

        for r in range(radius, 0, -1):
            t = r / radius
            if t > 0.6:
                color = _mix(cfg.sun_core_color, cfg.sun_edge_color, (t - 0.6) / 0.4)
            else:
                color = _mix(cfg.sun_center_color, cfg.sun_core_color, t / 0.6)
            pygame.draw.circle(sprite, color, center, r)

        self._sun_cache[radius] = sprite
        return sprite


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
