"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from vastu.domain.analyses import AnalysisDefinition, AnalysisRegistry
from vastu.domain.services.coverage import (
    DEFAULT_ARC_RESOLUTION,
    DEFAULT_SAMPLES_PER_SECTOR,
    RadialBand,
)
from vastu.domain.services.scoring import AnalysisReport, DirectionFlags
from vastu.domain.services.sectors import CenterMode, DirectionalCircle
from vastu.domain.value_objects import (
    DirectionCoverage,
    MainDirection,
    Point2D,
    SectorCount,
    SectorCoverage,
)

COVERAGE_METHODS = ("monte_carlo", "exact")


@dataclass
class AnalysisRequest:
    """Input DTO for a directional analysis run.

    Attributes:
        boundary: Boundary polygon vertices in image coordinates.
        north_rotation: North bearing in degrees.
        granularity: Sector count of the reported partition.
        center_mode: "bbox" or "centroid".
        radius: Explicit circle radius, or None for the inscribed radius.
        flags: Situational flags per main direction.
        analyses: Analysis names to run; empty runs all registered analyses.
        method: Coverage method, "monte_carlo" or "exact".
        samples_per_sector: Sampler points per sector.
        seed: Optional sampler seed.
        inner_ratio: Radial band override, inner edge.
        outer_ratio: Radial band override, outer edge.
        arc_resolution: Chords per wedge arc for the exact method.
    """

    boundary: list[Point2D]
    north_rotation: float = 0.0
    granularity: int = 32
    center_mode: str = CenterMode.BOUNDING_BOX.value
    radius: float | None = None
    flags: dict[MainDirection, DirectionFlags] = field(default_factory=dict)
    analyses: list[str] = field(default_factory=list)
    method: str = "monte_carlo"
    samples_per_sector: int = DEFAULT_SAMPLES_PER_SECTOR
    seed: int | None = None
    inner_ratio: float | None = None
    outer_ratio: float | None = None
    arc_resolution: int = DEFAULT_ARC_RESOLUTION

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if len(self.boundary) < 3:
            errors.append("Boundary needs at least 3 points")
        if not math.isfinite(self.north_rotation):
            errors.append("North rotation must be finite")
        if self.granularity not in {c.value for c in SectorCount}:
            errors.append("Granularity must be one of: 8, 16, 32")
        if self.center_mode not in {m.value for m in CenterMode}:
            errors.append("Center mode must be one of: bbox, centroid")
        if self.radius is not None and not self.radius > 0:
            errors.append("Radius must be positive")
        if self.method not in COVERAGE_METHODS:
            errors.append(f"Coverage method must be one of: {', '.join(COVERAGE_METHODS)}")
        if self.samples_per_sector < 1:
            errors.append("Samples per sector must be at least 1")
        if self.arc_resolution < 1:
            errors.append("Arc resolution must be at least 1")

        unknown = [name for name in self.analyses if not AnalysisRegistry.is_registered(name)]
        if unknown:
            errors.append(
                f"Unknown analyses: {', '.join(unknown)}. "
                f"Available: {', '.join(AnalysisRegistry.available())}"
            )
            return errors

        for definition in self.selected_analyses():
            try:
                self.resolve_band(definition.band)
            except ValueError as e:
                errors.append(f"Analysis '{definition.name}': {e}")
        return errors

    def selected_analyses(self) -> list[AnalysisDefinition]:
        """Analyses to run, in requested order without repeats."""
        names = self.analyses or AnalysisRegistry.available()
        return [AnalysisRegistry.get(name) for name in dict.fromkeys(names)]

    def resolve_band(self, default: RadialBand) -> RadialBand:
        """Apply the configured ratio overrides to an analysis' default band.

        Raises:
            ValueError: If the overrides produce an invalid band.
        """
        return RadialBand(
            inner_ratio=default.inner_ratio if self.inner_ratio is None else self.inner_ratio,
            outer_ratio=default.outer_ratio if self.outer_ratio is None else self.outer_ratio,
        )

    def display_band(self) -> RadialBand:
        """Band of the reported sector table: that of the first selected analysis.

        Raises:
            ValueError: If the overrides produce an invalid band.
        """
        return self.resolve_band(self.selected_analyses()[0].band)


@dataclass
class AnalysisOutput:
    """Output DTO containing the results of an analysis run.

    Attributes:
        circle: The reported sector partition over the boundary.
        sector_coverage: Coverage of each reported sector, measured over the
            band of the first selected analysis.
        direction_coverage: Aggregated coverage per main direction, keyed by
            analysis name (each analysis measures over its own band).
        reports: Analysis reports keyed by analysis name.
        errors: List of error messages if the run failed.
    """

    circle: DirectionalCircle | None = None
    sector_coverage: dict[int, SectorCoverage] = field(default_factory=dict)
    direction_coverage: dict[str, dict[MainDirection, DirectionCoverage]] = field(
        default_factory=dict
    )
    reports: dict[str, AnalysisReport] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the analysis ran successfully."""
        return len(self.errors) == 0


__all__ = ["AnalysisOutput", "AnalysisRequest", "COVERAGE_METHODS"]
