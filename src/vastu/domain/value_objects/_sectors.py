"""Sector partition and coverage value objects."""

from __future__ import annotations

from dataclasses import dataclass

from ._directions import MainDirection

FULLY_COVERED_THRESHOLD = 95.0
MAJORITY_INSIDE_THRESHOLD = 50.0


@dataclass(frozen=True)
class Sector:
    """One angular slice of a circular partition.

    Angles are degrees clockwise from north after the rotation offset has
    been applied, normalized into [0, 360). A sector that crosses north has
    ``end_angle < start_angle``.

    Attributes:
        index: Position of the sector in its partition, starting at 0.
        start_angle: Inclusive start bearing.
        end_angle: Exclusive end bearing.
        center_angle: Bearing of the sector bisector.
        span: Angular width in degrees.
        direction_label: Compass label from the partition's label table.
        direction_code: Short code used in reports (e.g. "NE2" for 32-way).
        main_direction: One of the eight aggregation directions.
        sector_group: Full name of the main direction.
        fine_indices: Canonical 32-way sector indices this sector covers.
    """

    index: int
    start_angle: float
    end_angle: float
    center_angle: float
    span: float
    direction_label: str
    direction_code: str
    main_direction: MainDirection
    sector_group: str
    fine_indices: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Sector index must be non-negative")
        if not 0 < self.span <= 360:
            raise ValueError("Sector span must be in (0, 360]")
        for name in ("start_angle", "end_angle", "center_angle"):
            value = getattr(self, name)
            if not 0 <= value < 360:
                raise ValueError(f"{name} must be normalized into [0, 360)")

    @property
    def wraps_north(self) -> bool:
        """True when the sector crosses the 360/0 boundary."""
        return self.start_angle > self.end_angle

    def contains_angle(self, angle: float) -> bool:
        """Check whether a bearing falls in ``[start_angle, end_angle)``."""
        angle = angle % 360
        if self.start_angle < self.end_angle:
            return self.start_angle <= angle < self.end_angle
        return angle >= self.start_angle or angle < self.end_angle


@dataclass(frozen=True)
class SectorCoverage:
    """Share of a sector that lies inside the boundary polygon.

    Attributes:
        sector_index: Index of the measured sector.
        coverage_percent: Inside fraction of the sector, 0 to 100.
        area_contribution: coverage_percent/100 times the full circular
            sector area (inner cutout ignored).
        sample_count: Number of samples drawn, 0 for exact clipping.
    """

    sector_index: int
    coverage_percent: float
    area_contribution: float
    sample_count: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.coverage_percent <= 100:
            raise ValueError("coverage_percent must be between 0 and 100")
        if self.area_contribution < 0:
            raise ValueError("area_contribution must be non-negative")

    @property
    def is_fully_covered(self) -> bool:
        return self.coverage_percent >= FULLY_COVERED_THRESHOLD

    @property
    def is_majority_inside(self) -> bool:
        return self.coverage_percent >= MAJORITY_INSIDE_THRESHOLD


@dataclass(frozen=True)
class DirectionCoverage:
    """Coverage of one main direction, aggregated from its sectors.

    Attributes:
        direction: The main direction.
        coverage_percent: Mean coverage of the constituent sectors, or None
            when no sector maps to the direction.
        area_contribution: Sum of the constituent sectors' area contributions.
        sector_indices: Indices of the constituent sectors.
    """

    direction: MainDirection
    coverage_percent: float | None
    area_contribution: float
    sector_indices: tuple[int, ...] = ()

    @property
    def has_coverage(self) -> bool:
        return self.coverage_percent is not None
