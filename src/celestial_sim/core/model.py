"""Data models for the orbital state."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class SeasonalPhase(str, Enum):
    """Named position of the Earth along its orbit."""

    VERNAL_EQUINOX = "Vernal Equinox"
    SPRING = "Spring"
    SUMMER_SOLSTICE = "Summer Solstice"
    SUMMER = "Summer"
    AUTUMNAL_EQUINOX = "Autumnal Equinox"
    AUTUMN = "Autumn"
    WINTER_SOLSTICE = "Winter Solstice"
    WINTER = "Winter"
    IN_ORBIT = "In Orbit"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrbitalState:
    """Everything the display needs for one instant of simulated time."""

    elapsed_days: float
    day_of_year: float
    orbital_angle: float
    position: tuple[float, float]
    rotation_angle: float
    seasonal_phase: SeasonalPhase
    distance_au: float
    day_offset: int
    calendar_date: date
    night_side_angle: float

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


__all__ = ["OrbitalState", "SeasonalPhase"]
