"""Configuration dataclasses for the celestial simulation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class OrbitCfg:
    orbit_rx: float = 250.0
    orbit_ry: float = 180.0
    days_in_year: float = 365.25
    start_date: date = date(2024, 3, 20)
    axial_tilt_deg: float = 23.5
    sun_radius: float = 30.0
    earth_radius: float = 12.0
    view_box: tuple[float, float, float, float] = (-300.0, -220.0, 600.0, 440.0)

    @property
    def eccentricity(self) -> float:
        ratio = self.orbit_ry / self.orbit_rx
        return (1.0 - ratio * ratio) ** 0.5


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1200
    height: int = 720
    target_fps: int = 60
    background_color: tuple[int, int, int] = (6, 10, 28)
    scene_panel_color: tuple[int, int, int, int] = (12, 18, 40, 255)
    side_panel_width: int = 380
    panel_margin: int = 20
    orbit_color: tuple[int, int, int, int] = (250, 204, 21, 128)
    orbit_dash_length: int = 4
    orbit_samples: int = 360
    sun_core_color: tuple[int, int, int] = (253, 230, 138)
    sun_center_color: tuple[int, int, int] = (255, 251, 235)
    sun_edge_color: tuple[int, int, int] = (249, 115, 22)
    sun_glow_color: tuple[int, int, int] = (253, 186, 116)
    sun_glow_alpha: int = 70
    sun_glow_radius_factor: float = 1.9
    earth_color: tuple[int, int, int] = (59, 130, 246)
    earth_axis_color: tuple[int, int, int, int] = (255, 255, 255, 178)
    earth_axis_overhang: float = 5.0
    night_color: tuple[int, int, int, int] = (0, 0, 0, 115)
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_label_color: tuple[int, int, int] = (250, 204, 21)
    hud_muted_color: tuple[int, int, int] = (180, 198, 228)
    card_color: tuple[int, int, int, int] = (30, 58, 138, 90)
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    accent_button_color: tuple[int, int, int, int] = (202, 138, 4, 235)
    accent_button_hover_color: tuple[int, int, int, int] = (234, 179, 8, 245)
    accent_button_text_color: tuple[int, int, int] = (12, 18, 30)
    num_stars: int = 220
    fps_text_alpha: int = int(255 * 0.6)


ORBIT_CFG = OrbitCfg()
RENDER_CFG = RenderCfg()


__all__ = ["ORBIT_CFG", "RENDER_CFG", "OrbitCfg", "RenderCfg"]
