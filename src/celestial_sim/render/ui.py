"""Control widgets for the side panel: speed slider, rotation switch, pause button."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TYPE_CHECKING

import pygame

from .assets import Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from celestial_sim.core.config import RenderCfg


@dataclass(frozen=True)
class ControlPalette:
    track: Color
    fill: Color
    knob: tuple[int, int, int]
    text: tuple[int, int, int]
    muted: tuple[int, int, int]
    accent: Color
    accent_hover: Color
    accent_text: tuple[int, int, int]

    @classmethod
    def from_cfg(cls, cfg: RenderCfg) -> "ControlPalette":
        return cls(
            track=cfg.button_color,
            fill=cfg.accent_button_color,
            knob=cfg.hud_text_color,
            text=cfg.hud_text_color,
            muted=cfg.hud_muted_color,
            accent=cfg.accent_button_color,
            accent_hover=cfg.accent_button_hover_color,
            accent_text=cfg.accent_button_text_color,
        )


def _is_left_press(event: pygame.event.Event) -> bool:
    return event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1


class SpeedSlider:
    """Horizontal slider snapping to one stop per speed level.

    ``labels[i]`` is shown under the knob when stop ``i`` is selected.
    Clicking or dragging anywhere on the track picks the nearest stop.
    """

    KNOB_RADIUS = 9

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        labels: Sequence[str],
        on_change: Callable[[int], None],
        value_getter: Callable[[], int],
    ) -> None:
        if len(labels) < 2:
            raise ValueError("A slider needs at least two stops")
        self.rect = pygame.Rect(rect)
        self._labels = tuple(labels)
        self._on_change = on_change
        self._value_getter = value_getter
        self._dragging = False

    @property
    def stops(self) -> int:
        return len(self._labels)

    @property
    def dragging(self) -> bool:
        return self._dragging

    def stop_x(self, index: int) -> int:
        span = self.rect.width - 2 * self.KNOB_RADIUS
        return self.rect.left + self.KNOB_RADIUS + round(span * index / (self.stops - 1))

    def index_at(self, x: float) -> int:
        span = max(1, self.rect.width - 2 * self.KNOB_RADIUS)
        ratio = (x - self.rect.left - self.KNOB_RADIUS) / span
        ratio = max(0.0, min(1.0, ratio))
        return int(round(ratio * (self.stops - 1)))

    def _select(self, x: float) -> None:
        index = self.index_at(x)
        if index != self._value_getter():
            self._on_change(index)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if _is_left_press(event) and self.rect.collidepoint(event.pos):
            self._dragging = True
            self._select(event.pos[0])
            return True
        if event.type == pygame.MOUSEMOTION and self._dragging:
            self._select(event.pos[0])
            return True
        if event.type == pygame.MOUSEBUTTONUP and self._dragging:
            self._dragging = False
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, palette: ControlPalette) -> None:
        index = self._value_getter()
        track = pygame.Rect(0, 0, self.rect.width - 2 * self.KNOB_RADIUS, 6)
        track.midleft = (self.rect.left + self.KNOB_RADIUS, self.rect.top + self.KNOB_RADIUS)
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        pygame.draw.rect(layer, palette.track, track, border_radius=3)
        filled = track.copy()
        filled.width = self.stop_x(index) - track.left
        if filled.width > 0:
            pygame.draw.rect(layer, palette.fill, filled, border_radius=3)
        surface.blit(layer, (0, 0))
        for stop in range(self.stops):
            pygame.draw.circle(surface, palette.muted, (self.stop_x(stop), track.centery), 2)
        pygame.draw.circle(surface, palette.knob, (self.stop_x(index), track.centery), self.KNOB_RADIUS)

        label = get_text_surface(font, self._labels[index], palette.text)
        surface.blit(label, label.get_rect(midtop=(self.rect.centerx, track.bottom + 12)))


class ToggleSwitch:
    """Labelled on/off pill switch."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        label: str,
        on_toggle: Callable[[], object],
        state_getter: Callable[[], bool],
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._label = label
        self._on_toggle = on_toggle
        self._state_getter = state_getter

    @property
    def pill(self) -> pygame.Rect:
        height = min(26, self.rect.height)
        pill = pygame.Rect(0, 0, height * 2, height)
        pill.midright = (self.rect.right - 12, self.rect.centery)
        return pill

    def handle_event(self, event: pygame.event.Event) -> bool:
        if _is_left_press(event) and self.rect.collidepoint(event.pos):
            self._on_toggle()
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, palette: ControlPalette) -> None:
        layer = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, palette.track, layer.get_rect(), border_radius=10)
        pill = self.pill.move(-self.rect.left, -self.rect.top)
        on = self._state_getter()
        pygame.draw.rect(layer, palette.fill if on else palette.muted, pill, border_radius=pill.height // 2)
        knob_x = pill.right - pill.height // 2 if on else pill.left + pill.height // 2
        pygame.draw.circle(layer, palette.knob, (knob_x, pill.centery), pill.height // 2 - 3)
        surface.blit(layer, self.rect.topleft)

        label = get_text_surface(font, self._label, palette.text)
        surface.blit(label, label.get_rect(midleft=(self.rect.left + 12, self.rect.centery)))


class ActionButton:
    """Full-width accent button whose caption follows the session state."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        on_click: Callable[[], object],
        caption_getter: Callable[[], str],
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._on_click = on_click
        self._caption_getter = caption_getter

    def handle_event(self, event: pygame.event.Event) -> bool:
        if _is_left_press(event) and self.rect.collidepoint(event.pos):
            self._on_click()
            return True
        return False

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        palette: ControlPalette,
        mouse_pos: tuple[int, int],
    ) -> None:
        color = palette.accent_hover if self.rect.collidepoint(mouse_pos) else palette.accent
        layer = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, color, layer.get_rect(), border_radius=12)
        surface.blit(layer, self.rect.topleft)
        caption = get_text_surface(font, self._caption_getter(), palette.accent_text)
        surface.blit(caption, caption.get_rect(center=self.rect.center))
