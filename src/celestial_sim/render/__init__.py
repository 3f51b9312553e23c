"""Rendering helpers for the celestial simulator."""

from .viewport import Viewport
from .assets import (
    AssetLibrary,
    get_text_surface,
    load_font,
)
from .draw import (
    draw_card,
    draw_dashed_path,
    draw_earth,
    draw_starfield,
    draw_sun,
    generate_starfield,
)
from .ui import (
    ActionButton,
    ControlPalette,
    SpeedSlider,
    ToggleSwitch,
)

__all__ = [
    "ActionButton",
    "AssetLibrary",
    "ControlPalette",
    "SpeedSlider",
    "ToggleSwitch",
    "Viewport",
    "draw_card",
    "draw_dashed_path",
    "draw_earth",
    "draw_starfield",
    "draw_sun",
    "generate_starfield",
    "get_text_surface",
    "load_font",
]
