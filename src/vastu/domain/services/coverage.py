"""Sector coverage estimation.

Coverage is the fraction of a sector's area that lies inside the boundary
polygon. Two estimators share one interface:

- ``MonteCarloCoverageEstimator`` draws points uniformly in angle and radius
  inside the sector and counts how many land inside the boundary. Results
  carry sampling noise; pass a ``seed`` for reproducible output.
- ``ExactCoverageEstimator`` clips an annular wedge polygon against the
  boundary with shapely and reports the area ratio directly.

Both report ``area_contribution`` against the full circular sector area,
ignoring the inner cutout of the radial band.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from shapely.geometry import Polygon

from vastu.domain.value_objects import (
    DirectionCoverage,
    MainDirection,
    Point2D,
    Sector,
    SectorCoverage,
)

from .polygon import point_in_polygon, validate_boundary
from .sectors import DirectionalCircle, point_on_circle

logger = logging.getLogger(__name__)

MIN_SAMPLES_PER_SECTOR = 20
DEFAULT_SAMPLES_PER_SECTOR = 200
DEFAULT_ARC_RESOLUTION = 16

# Keeps seeded per-sector streams apart
_SEED_STRIDE = 1_000_003


@dataclass(frozen=True)
class RadialBand:
    """Radial sampling band as fractions of the circle radius.

    Attributes:
        inner_ratio: Inner edge of the band, 0 for the full wedge.
        outer_ratio: Outer edge of the band.
    """

    inner_ratio: float = 0.3
    outer_ratio: float = 1.0

    def __post_init__(self) -> None:
        if not 0 <= self.inner_ratio < self.outer_ratio <= 1:
            raise ValueError(
                "Radial band must satisfy 0 <= inner_ratio < outer_ratio <= 1, "
                f"got [{self.inner_ratio}, {self.outer_ratio}]"
            )

    @classmethod
    def wide(cls) -> "RadialBand":
        """The [0.2R, 1.0R] band used by area-share analyses."""
        return cls(inner_ratio=0.2, outer_ratio=1.0)


def _area_contribution(circle: DirectionalCircle, sector: Sector, coverage: float) -> float:
    return coverage / 100.0 * circle.sector_area(sector)


class _BaseCoverageEstimator(ABC):
    """Shared sweep over a whole partition."""

    band: RadialBand

    @abstractmethod
    def estimate(
        self,
        circle: DirectionalCircle,
        sector: Sector,
        boundary: Sequence[Point2D],
    ) -> SectorCoverage:
        """Estimate the coverage of one sector."""
        ...

    def estimate_all(
        self,
        circle: DirectionalCircle,
        boundary: Sequence[Point2D],
    ) -> dict[int, SectorCoverage]:
        """Estimate coverage for every sector of the circle.

        Returns:
            Mapping of sector index to its coverage.
        """
        points = validate_boundary(boundary)
        results = {
            sector.index: self.estimate(circle, sector, points) for sector in circle.sectors
        }
        logger.debug(
            f"{type(self).__name__} measured {len(results)} sectors "
            f"(band {self.band.inner_ratio}-{self.band.outer_ratio})"
        )
        return results


class MonteCarloCoverageEstimator(_BaseCoverageEstimator):
    """Stochastic coverage estimate by point sampling.

    Each sample picks a bearing uniformly inside the sector span and a
    distance uniformly inside the radial band. With ``seed`` set, each sector
    draws from its own stream derived from the seed and the sector index, so
    results do not depend on the order sectors are measured in.

    Args:
        samples_per_sector: Number of points drawn per sector.
        band: Radial band to sample from.
        seed: Optional seed for reproducible results.
    """

    def __init__(
        self,
        samples_per_sector: int = DEFAULT_SAMPLES_PER_SECTOR,
        band: RadialBand | None = None,
        seed: int | None = None,
    ) -> None:
        if samples_per_sector < 1:
            raise ValueError("samples_per_sector must be at least 1")
        self.samples_per_sector = samples_per_sector
        self.band = band or RadialBand()
        self.seed = seed
        self._shared_rng = random.Random(seed)

    def _rng_for(self, sector: Sector) -> random.Random:
        if self.seed is None:
            return self._shared_rng
        return random.Random(self.seed * _SEED_STRIDE + sector.index)

    def estimate(
        self,
        circle: DirectionalCircle,
        sector: Sector,
        boundary: Sequence[Point2D],
    ) -> SectorCoverage:
        rng = self._rng_for(sector)
        inner = circle.radius * self.band.inner_ratio
        depth = circle.radius * (self.band.outer_ratio - self.band.inner_ratio)

        inside = 0
        for _ in range(self.samples_per_sector):
            angle = sector.start_angle + sector.span * rng.random()
            distance = inner + depth * rng.random()
            if point_in_polygon(point_on_circle(circle.center, distance, angle), boundary):
                inside += 1

        coverage = inside / self.samples_per_sector * 100.0
        return SectorCoverage(
            sector_index=sector.index,
            coverage_percent=coverage,
            area_contribution=_area_contribution(circle, sector, coverage),
            sample_count=self.samples_per_sector,
        )


class ExactCoverageEstimator(_BaseCoverageEstimator):
    """Deterministic coverage by clipping sector wedges with shapely.

    The wedge outline approximates each arc with ``arc_resolution`` chords,
    so the ratio converges on the analytic value as the resolution grows.

    Args:
        band: Radial band defining the wedge.
        arc_resolution: Number of chords per arc.
    """

    def __init__(
        self,
        band: RadialBand | None = None,
        arc_resolution: int = DEFAULT_ARC_RESOLUTION,
    ) -> None:
        if arc_resolution < 1:
            raise ValueError("arc_resolution must be at least 1")
        self.band = band or RadialBand()
        self.arc_resolution = arc_resolution

    def wedge(self, circle: DirectionalCircle, sector: Sector) -> Polygon:
        """Annular wedge polygon for a sector."""
        steps = [
            sector.start_angle + sector.span * k / self.arc_resolution
            for k in range(self.arc_resolution + 1)
        ]
        outer_radius = circle.radius * self.band.outer_ratio
        ring = [point_on_circle(circle.center, outer_radius, a).as_tuple() for a in steps]
        if self.band.inner_ratio > 0:
            inner_radius = circle.radius * self.band.inner_ratio
            ring.extend(
                point_on_circle(circle.center, inner_radius, a).as_tuple()
                for a in reversed(steps)
            )
        else:
            ring.append(circle.center.as_tuple())
        return Polygon(ring)

    @staticmethod
    def boundary_shape(boundary: Sequence[Point2D]) -> Polygon:
        """Shapely polygon for a boundary, repaired when self-intersecting."""
        shape = Polygon([p.as_tuple() for p in validate_boundary(boundary)])
        if not shape.is_valid:
            logger.debug("Boundary polygon is invalid; repairing with buffer(0)")
            shape = shape.buffer(0)
        return shape

    def estimate(
        self,
        circle: DirectionalCircle,
        sector: Sector,
        boundary: Sequence[Point2D],
    ) -> SectorCoverage:
        return self._estimate_against(circle, sector, self.boundary_shape(boundary))

    def estimate_all(
        self,
        circle: DirectionalCircle,
        boundary: Sequence[Point2D],
    ) -> dict[int, SectorCoverage]:
        shape = self.boundary_shape(boundary)
        return {
            sector.index: self._estimate_against(circle, sector, shape)
            for sector in circle.sectors
        }

    def _estimate_against(
        self, circle: DirectionalCircle, sector: Sector, shape: Polygon
    ) -> SectorCoverage:
        wedge = self.wedge(circle, sector)
        inside_area = wedge.intersection(shape).area
        coverage = min(100.0, inside_area / wedge.area * 100.0)
        return SectorCoverage(
            sector_index=sector.index,
            coverage_percent=coverage,
            area_contribution=_area_contribution(circle, sector, coverage),
        )


def aggregate_by_main_direction(
    circle: DirectionalCircle,
    coverages: Mapping[int, SectorCoverage],
) -> dict[MainDirection, DirectionCoverage]:
    """Roll sector coverage up to the eight main directions.

    Coverage is the mean over the direction's sectors; area contributions
    are summed. A direction with no sectors gets ``coverage_percent=None``.
    """
    result: dict[MainDirection, DirectionCoverage] = {}
    for direction, sectors in circle.by_main_direction().items():
        measured = [coverages[s.index] for s in sectors if s.index in coverages]
        if not measured:
            logger.warning(f"No sectors measured for direction {direction.value}")
            result[direction] = DirectionCoverage(
                direction=direction, coverage_percent=None, area_contribution=0.0
            )
            continue
        result[direction] = DirectionCoverage(
            direction=direction,
            coverage_percent=sum(c.coverage_percent for c in measured) / len(measured),
            area_contribution=sum(c.area_contribution for c in measured),
            sector_indices=tuple(c.sector_index for c in measured),
        )
    return result


__all__ = [
    "DEFAULT_ARC_RESOLUTION",
    "DEFAULT_SAMPLES_PER_SECTOR",
    "ExactCoverageEstimator",
    "MIN_SAMPLES_PER_SECTOR",
    "MonteCarloCoverageEstimator",
    "RadialBand",
    "aggregate_by_main_direction",
]
