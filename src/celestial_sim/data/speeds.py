"""Speed level definitions for the simulation clock."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpeedLevel:
    key: str
    label: str
    days_per_second: float
    description: str


SPEED_LEVEL_DEFINITIONS: tuple[SpeedLevel, ...] = (
    SpeedLevel(
        key="day",
        label="1 Day/s",
        days_per_second=1.0,
        description="One simulated day per real second; the Earth spins visibly.",
    ),
    SpeedLevel(
        key="week",
        label="1 Week/s",
        days_per_second=7.0,
        description="One week per second; a full orbit takes about 52 seconds.",
    ),
    SpeedLevel(
        key="month",
        label="1 Month/s",
        days_per_second=30.4,
        description="An average month per second; seasons pass in a few seconds.",
    ),
    SpeedLevel(
        key="year",
        label="1 Year/s",
        days_per_second=365.25,
        description="One full orbit every second.",
    ),
)

SPEED_MULTIPLIERS: tuple[float, ...] = tuple(
    level.days_per_second for level in SPEED_LEVEL_DEFINITIONS
)
DEFAULT_SPEED_LEVEL = 1


def get_speed_level(index: int) -> SpeedLevel:
    """Return the speed level at *index*, rejecting anything outside the set."""

    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"Speed level index must be an int, got {index!r}")
    if not 0 <= index < len(SPEED_LEVEL_DEFINITIONS):
        raise ValueError(
            f"Speed level index {index} outside 0..{len(SPEED_LEVEL_DEFINITIONS) - 1}"
        )
    return SPEED_LEVEL_DEFINITIONS[index]


__all__ = [
    "DEFAULT_SPEED_LEVEL",
    "SPEED_LEVEL_DEFINITIONS",
    "SPEED_MULTIPLIERS",
    "SpeedLevel",
    "get_speed_level",
]
