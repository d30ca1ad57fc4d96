"""Compass direction types and label tables."""

from __future__ import annotations

from enum import Enum


class MainDirection(str, Enum):
    """The eight canonical compass directions used for score aggregation."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @classmethod
    def ordered(cls) -> tuple["MainDirection", ...]:
        """Directions clockwise from north."""
        return tuple(cls)

    @property
    def position(self) -> int:
        """Clockwise position from north, 0 to 7."""
        return MAIN_DIRECTION_ORDER.index(self.value)

    @property
    def angle(self) -> float:
        """Compass bearing of the direction in degrees."""
        return self.position * 45.0

    @property
    def opposite(self) -> "MainDirection":
        return MainDirection(MAIN_DIRECTION_ORDER[(self.position + 4) % 8])

    @property
    def full_name(self) -> str:
        return DIRECTION_NAMES[self.value]


class SectorCount(int, Enum):
    """Supported partition granularities."""

    EIGHT = 8
    SIXTEEN = 16
    THIRTY_TWO = 32

    @property
    def width(self) -> float:
        """Angular width of one sector in degrees."""
        return 360.0 / self.value

    @property
    def fine_per_sector(self) -> int:
        """Number of canonical 32-way sectors inside one sector."""
        return CANONICAL_SECTOR_COUNT // self.value


CANONICAL_SECTOR_COUNT = 32

MAIN_DIRECTION_ORDER: tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

WIND_16_LABELS: tuple[str, ...] = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)

DIRECTION_NAMES: dict[str, str] = {
    "N": "North",
    "NNE": "North-Northeast",
    "NE": "Northeast",
    "ENE": "East-Northeast",
    "E": "East",
    "ESE": "East-Southeast",
    "SE": "Southeast",
    "SSE": "South-Southeast",
    "S": "South",
    "SSW": "South-Southwest",
    "SW": "Southwest",
    "WSW": "West-Southwest",
    "W": "West",
    "WNW": "West-Northwest",
    "NW": "Northwest",
    "NNW": "North-Northwest",
}
