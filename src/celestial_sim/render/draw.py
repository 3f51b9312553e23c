from __future__ import annotations

import math
import random
from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .assets import AssetLibrary, Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from celestial_sim.core.config import RenderCfg


def generate_starfield(
    num_stars: int,
    *,
    size: tuple[int, int],
    rng: random.Random | None = None,
) -> list[dict[str, object]]:
    rng = rng or random.Random()
    width, height = size
    stars: list[dict[str, object]] = []
    for _ in range(num_stars):
        x = rng.uniform(0, width)
        y = rng.uniform(0, height)
        radius = rng.choice([1, 1, 1, 2])
        alpha = rng.randint(80, 150)
        base = rng.randint(200, 240)
        color = (
            max(0, base - rng.randint(10, 25)),
            max(0, base - rng.randint(5, 15)),
            base,
        )
        star_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(star_surface, (*color, alpha), (radius, radius), radius)
        stars.append({"pos": (x, y), "surface": star_surface, "radius": radius})
    return stars


def draw_starfield(surface: pygame.Surface, starfield: Iterable[dict[str, object]]) -> None:
    width, height = surface.get_size()
    for star in starfield:
        base_x, base_y = star["pos"]  # type: ignore[index]
        star_surface = star["surface"]  # type: ignore[index]
        radius = star["radius"]  # type: ignore[index]
        sx = int(base_x % width)
        sy = int(base_y % height)
        surface.blit(star_surface, (sx - radius, sy - radius))


def draw_dashed_path(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[int, int]],
    dash_length: float,
    width: int = 1,
) -> None:
    """Draw a polyline as alternating dashes and gaps of *dash_length* pixels."""

    if len(points) < 2 or dash_length <= 0:
        return
    drawing = True
    remaining = dash_length
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        seg_len = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while pos < seg_len:
            step = min(remaining, seg_len - pos)
            if drawing:
                t0 = pos / seg_len
                t1 = (pos + step) / seg_len
                start = (x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0)
                end = (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1)
                pygame.draw.line(surface, color, start, end, width)
            pos += step
            remaining -= step
            if remaining <= 1e-9:
                drawing = not drawing
                remaining = dash_length


def draw_sun(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    assets: AssetLibrary,
) -> None:
    if radius <= 0:
        return
    sprite = assets.get_sun_sprite(radius)
    surface.blit(sprite, sprite.get_rect(center=position))


def draw_earth(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    spin_deg: float,
    night_side_deg: float,
    axis_overhang: int,
    render_cfg: RenderCfg,
) -> None:
    """Earth disc with its spin axis line and the half turned away from the Sun.

    *spin_deg* is the axial tilt plus the rotation angle, clockwise on screen.
    """

    if radius <= 0:
        return
    pygame.draw.circle(surface, render_cfg.earth_color, position, radius)

    size = (radius + axis_overhang + 2) * 2
    overlay = pygame.Surface((size, size), pygame.SRCALPHA)
    center = np.array([size / 2.0, size / 2.0])

    facing = math.radians(night_side_deg)
    angles = np.linspace(facing - math.pi / 2.0, facing + math.pi / 2.0, 33)
    arc = center + radius * np.column_stack((np.cos(angles), np.sin(angles)))
    pygame.draw.polygon(overlay, render_cfg.night_color, [tuple(p) for p in arc])

    spin = math.radians(spin_deg)
    half_axis = radius + axis_overhang
    direction = np.array([math.sin(spin), -math.cos(spin)]) * half_axis
    pygame.draw.line(
        overlay,
        render_cfg.earth_axis_color,
        tuple(center - direction),
        tuple(center + direction),
        2,
    )
    surface.blit(overlay, overlay.get_rect(center=position))


def draw_card(
    surface: pygame.Surface,
    rect: pygame.Rect,
    title: str,
    value: str,
    *,
    title_font: pygame.font.Font,
    value_font: pygame.font.Font,
    render_cfg: RenderCfg,
) -> None:
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.rect(card, render_cfg.card_color, card.get_rect(), border_radius=10)
    title_surf = get_text_surface(title_font, title, render_cfg.hud_label_color)
    value_surf = get_text_surface(value_font, value, render_cfg.hud_text_color)
    card.blit(title_surf, title_surf.get_rect(midtop=(rect.width // 2, 10)))
    card.blit(value_surf, value_surf.get_rect(midbottom=(rect.width // 2, rect.height - 12)))
    surface.blit(card, rect.topleft)
