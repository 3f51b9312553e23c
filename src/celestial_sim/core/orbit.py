"""Kinematics of the simplified Earth-Sun model.

The Earth moves along a fixed, axis-aligned ellipse centred on the Sun at a
constant angular speed (no equal-areas sweep) and spins once per simulated
day. Every function here is a pure function of elapsed simulated days.
"""
from __future__ import annotations

import math
from datetime import date, timedelta

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .model import OrbitalState, SeasonalPhase


ORBIT_RX = ORBIT_CFG.orbit_rx
ORBIT_RY = ORBIT_CFG.orbit_ry
DAYS_IN_YEAR = ORBIT_CFG.days_in_year
START_DATE = ORBIT_CFG.start_date
ECCENTRICITY = ORBIT_CFG.eccentricity
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def day_of_year(elapsed_days: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Position within the current orbit, in ``[0, days_in_year)``."""

    day = elapsed_days % cfg.days_in_year
    # Tiny negative inputs round up to exactly days_in_year.
    if day >= cfg.days_in_year:
        return 0.0
    return day + 0.0


def orbital_angle(day: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Angle in radians swept since the vernal-equinox point."""

    return 2.0 * math.pi * day / cfg.days_in_year


def position(angle: float, cfg: OrbitCfg = ORBIT_CFG) -> tuple[float, float]:
    return cfg.orbit_rx * math.cos(angle), cfg.orbit_ry * math.sin(angle)


def rotation_angle(elapsed_days: float, rotation_enabled: bool = True) -> float:
    """Spin of the Earth in degrees, one full turn per simulated day."""

    if not rotation_enabled:
        return 0.0
    return (elapsed_days * 360.0) % 360.0


def distance_from_sun(angle: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Distance from the Sun at the ellipse centre, in units of the semi-major axis."""

    rx, ry = cfg.orbit_rx, cfg.orbit_ry
    radius = (rx * ry) / math.hypot(ry * math.cos(angle), rx * math.sin(angle))
    return radius / rx


def calendar_day_offset(elapsed_days: float) -> int:
    return math.floor(elapsed_days)


def calendar_date(elapsed_days: float, cfg: OrbitCfg = ORBIT_CFG) -> date:
    return cfg.start_date + timedelta(days=calendar_day_offset(elapsed_days))


def format_calendar_date(value: date) -> str:
    """Long US style date, e.g. ``March 20, 2024``."""

    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def seasonal_phase(day: float) -> SeasonalPhase:
    """Label for the orbital position at *day* of the year.

    The boundaries mix ``>`` and ``>=`` so days 5, 96, 187 and 278 fall
    through to ``In Orbit``.
    """

    d = math.floor(day)
    if 0 <= d < 5 or d >= 360:
        return SeasonalPhase.VERNAL_EQUINOX
    if 5 < d < 86:
        return SeasonalPhase.SPRING
    if 86 <= d < 96:
        return SeasonalPhase.SUMMER_SOLSTICE
    if 96 < d < 177:
        return SeasonalPhase.SUMMER
    if 177 <= d < 187:
        return SeasonalPhase.AUTUMNAL_EQUINOX
    if 187 < d < 268:
        return SeasonalPhase.AUTUMN
    if 268 <= d < 278:
        return SeasonalPhase.WINTER_SOLSTICE
    if 278 < d < 360:
        return SeasonalPhase.WINTER
    return SeasonalPhase.IN_ORBIT


def night_side_angle(point: tuple[float, float]) -> float:
    """Direction of the Sun-to-Earth vector in degrees."""

    x, y = point
    return math.degrees(math.atan2(y, x))


def sample_orbit_path(num_points: int, cfg: OrbitCfg = ORBIT_CFG) -> np.ndarray:
    """Closed polyline of ``num_points + 1`` points along the orbit ellipse."""

    if num_points < 3:
        raise ValueError("An orbit path needs at least 3 points")
    angles = np.linspace(0.0, 2.0 * math.pi, num_points + 1)
    points = np.column_stack(
        (cfg.orbit_rx * np.cos(angles), cfg.orbit_ry * np.sin(angles))
    )
    points[-1] = points[0]
    return points


def evaluate(
    elapsed_days: float,
    rotation_enabled: bool = True,
    cfg: OrbitCfg = ORBIT_CFG,
) -> OrbitalState:
    """Derive the full orbital state for *elapsed_days* of simulated time."""

    day = day_of_year(elapsed_days, cfg)
    angle = orbital_angle(day, cfg)
    point = position(angle, cfg)
    offset = calendar_day_offset(elapsed_days)
    return OrbitalState(
        elapsed_days=elapsed_days,
        day_of_year=day,
        orbital_angle=angle,
        position=point,
        rotation_angle=rotation_angle(elapsed_days, rotation_enabled),
        seasonal_phase=seasonal_phase(day),
        distance_au=distance_from_sun(angle, cfg),
        day_offset=offset,
        calendar_date=cfg.start_date + timedelta(days=offset),
        night_side_angle=night_side_angle(point),
    )


__all__ = [
    "DAYS_IN_YEAR",
    "ECCENTRICITY",
    "MONTH_NAMES",
    "ORBIT_RX",
    "ORBIT_RY",
    "START_DATE",
    "calendar_date",
    "calendar_day_offset",
    "day_of_year",
    "distance_from_sun",
    "evaluate",
    "format_calendar_date",
    "night_side_angle",
    "orbital_angle",
    "position",
    "rotation_angle",
    "sample_orbit_path",
    "seasonal_phase",
]
