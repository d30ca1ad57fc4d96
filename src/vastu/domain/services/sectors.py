"""North-aligned circular sector model.

A boundary polygon is analysed by inscribing a circle at its center and
cutting that circle into 8, 16 or 32 equal sectors, rotated so that sector
0 starts at the user-chosen north. The 32-way partition is canonical: every
coarser sector covers a contiguous run of 32-way sectors, and each of the
eight main directions owns exactly four 32-way sectors centered on its
compass bearing (north owns sectors 30, 31, 0 and 1).

Angles are bearings in degrees, clockwise from north, with north pointing
towards -Y in image space.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from vastu.domain.errors import InvalidBoundaryError
from vastu.domain.value_objects import (
    CANONICAL_SECTOR_COUNT,
    DIRECTION_NAMES,
    MAIN_DIRECTION_ORDER,
    WIND_16_LABELS,
    MainDirection,
    Point2D,
    Sector,
    SectorCount,
)

from .polygon import bounding_box, centroid, validate_boundary

logger = logging.getLogger(__name__)


class CenterMode(str, Enum):
    """Where the analysis circle is centered."""

    BOUNDING_BOX = "bbox"
    CENTROID = "centroid"


# =============================================================================
# Angle helpers
# =============================================================================


def normalize_angle(angle: float) -> float:
    """Normalize a bearing into [0, 360)."""
    result = angle % 360.0
    # Tiny negative inputs can round up to exactly 360.0
    if result >= 360.0:
        return 0.0
    return result


def angle_from_center(point: Point2D, center: Point2D) -> float:
    """Bearing of ``point`` as seen from ``center``, 0 degrees = -Y."""
    degrees = math.degrees(math.atan2(point.x - center.x, -(point.y - center.y)))
    return normalize_angle(degrees)


def point_on_circle(center: Point2D, radius: float, angle: float) -> Point2D:
    """Point at ``radius`` from ``center`` along a bearing."""
    radians = math.radians(angle)
    return Point2D(
        center.x + radius * math.sin(radians),
        center.y - radius * math.cos(radians),
    )


# =============================================================================
# Direction tables
# =============================================================================


def main_direction_for_sector(index: int) -> MainDirection:
    """Main direction owning a canonical 32-way sector.

    Each direction owns four sectors centered on its bearing, so the run for
    direction k starts at sector ``4k - 2``.
    """
    if not 0 <= index < CANONICAL_SECTOR_COUNT:
        raise ValueError(f"32-way sector index out of range: {index}")
    return MainDirection(MAIN_DIRECTION_ORDER[((index + 2) // 4) % 8])


def _labels_for(count: SectorCount, index: int) -> tuple[str, str, MainDirection]:
    """Return (direction_label, direction_code, main_direction) for a sector."""
    if count is SectorCount.EIGHT:
        label = MAIN_DIRECTION_ORDER[index]
        return label, label, MainDirection(label)
    if count is SectorCount.SIXTEEN:
        label = WIND_16_LABELS[index]
        return label, label, main_direction_for_sector(index * 2)

    label = WIND_16_LABELS[((index + 1) // 2) % 16]
    main = main_direction_for_sector(index)
    position = (index + 2) % 4 + 1
    return label, f"{main.value}{position}", main


# =============================================================================
# Partition
# =============================================================================


def build_sectors(
    count: int | SectorCount = SectorCount.THIRTY_TWO,
    rotation: float = 0.0,
) -> tuple[Sector, ...]:
    """Partition the circle into ``count`` equal sectors.

    Sector ``i`` starts at ``i * 360/count + rotation`` (mod 360). Each
    sector's end is computed with the same expression as the next sector's
    start, so the spans tile 360 degrees exactly.

    An 8-way sector starts on the bearing of its label, so its run of fine
    sectors straddles two main directions: sector 0 (N) covers fine sectors
    0-3, owned by N, N, NE and NE. Its ``main_direction`` follows the label.
    Scoring never reads coarse sectors; it aggregates the canonical 32-way
    partition.

    Args:
        count: Number of sectors (8, 16 or 32).
        rotation: Bearing of north in image space, in degrees.

    Returns:
        Sectors in index order.

    Raises:
        ValueError: If ``count`` is not a supported granularity.
    """
    try:
        granularity = SectorCount(count)
    except ValueError:
        supported = ", ".join(str(c.value) for c in SectorCount)
        raise ValueError(
            f"Unsupported sector count {count}; expected one of {supported}"
        ) from None

    width = granularity.width
    per_sector = granularity.fine_per_sector
    sectors: list[Sector] = []
    for i in range(granularity.value):
        label, code, main = _labels_for(granularity, i)
        sectors.append(
            Sector(
                index=i,
                start_angle=normalize_angle(i * width + rotation),
                end_angle=normalize_angle((i + 1) * width + rotation),
                center_angle=normalize_angle(i * width + width / 2 + rotation),
                span=width,
                direction_label=label,
                direction_code=code,
                main_direction=main,
                sector_group=DIRECTION_NAMES[main.value],
                fine_indices=tuple(range(i * per_sector, (i + 1) * per_sector)),
            )
        )
    logger.debug(f"Built {len(sectors)} sectors with rotation {rotation}")
    return tuple(sectors)


def find_sector_for_angle(angle: float, sectors: Iterable[Sector]) -> Sector | None:
    """Linear search for the sector whose ``[start, end)`` holds the bearing.

    Returns:
        The matching sector, or None if ``sectors`` does not cover the angle.
    """
    for sector in sectors:
        if sector.contains_angle(angle):
            return sector
    return None


def angle_to_sector_index(angle: float, count: int, rotation: float = 0.0) -> int:
    """Arithmetic sector lookup for a full partition."""
    width = SectorCount(count).width
    return int(normalize_angle(angle - rotation) // width) % count


def group_by_main_direction(
    sectors: Iterable[Sector],
) -> dict[MainDirection, tuple[Sector, ...]]:
    """Group sectors by main direction.

    Every main direction is present in the result, with an empty tuple when
    no sector maps to it.
    """
    groups: dict[MainDirection, list[Sector]] = {d: [] for d in MainDirection}
    for sector in sectors:
        groups[sector.main_direction].append(sector)
    return {direction: tuple(items) for direction, items in groups.items()}


# =============================================================================
# Directional circle
# =============================================================================


@dataclass(frozen=True)
class DirectionalCircle:
    """A sector partition placed over a boundary polygon.

    Attributes:
        center: Circle center in image coordinates.
        radius: Circle radius.
        rotation: North bearing used to build the sectors.
        sectors: The partition, in index order.
    """

    center: Point2D
    radius: float
    rotation: float
    sectors: tuple[Sector, ...]

    def __post_init__(self) -> None:
        if not self.radius > 0:
            raise InvalidBoundaryError(
                f"Circle radius must be positive, got {self.radius}",
                reason="invalid_radius",
            )

    @property
    def count(self) -> int:
        return len(self.sectors)

    @property
    def area(self) -> float:
        return math.pi * self.radius**2

    def sector_area(self, sector: Sector) -> float:
        """Full circular-sector area, ignoring any inner cutout."""
        return (sector.span / 360.0) * self.area

    def sector_for_point(self, point: Point2D) -> Sector | None:
        """Sector containing the bearing from the center to ``point``."""
        return find_sector_for_angle(angle_from_center(point, self.center), self.sectors)

    def by_main_direction(self) -> dict[MainDirection, tuple[Sector, ...]]:
        return group_by_main_direction(self.sectors)


def build_directional_circle(
    boundary: Sequence[Point2D],
    count: int | SectorCount = SectorCount.THIRTY_TWO,
    rotation: float = 0.0,
    center_mode: CenterMode | str = CenterMode.BOUNDING_BOX,
    radius: float | None = None,
) -> DirectionalCircle:
    """Place a sector partition over a boundary polygon.

    The radius defaults to half the smaller bounding-box side, so the circle
    is inscribed in the box.

    Raises:
        InvalidBoundaryError: If the boundary has fewer than three points, the
            centroid is requested for a degenerate polygon, or the radius is
            not positive.
    """
    points = validate_boundary(boundary)
    box = bounding_box(points)
    mode = CenterMode(center_mode)
    center = box.center if mode is CenterMode.BOUNDING_BOX else centroid(points)
    return DirectionalCircle(
        center=center,
        radius=box.inscribed_radius if radius is None else radius,
        rotation=rotation,
        sectors=build_sectors(count, rotation),
    )


__all__ = [
    "CenterMode",
    "DirectionalCircle",
    "angle_from_center",
    "angle_to_sector_index",
    "build_directional_circle",
    "build_sectors",
    "find_sector_for_angle",
    "group_by_main_direction",
    "main_direction_for_sector",
    "normalize_angle",
    "point_on_circle",
]
