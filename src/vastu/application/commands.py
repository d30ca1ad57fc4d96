"""Application commands (use cases) for directional analysis."""

from __future__ import annotations

import logging
from collections.abc import Callable

from vastu.contracts import CoverageEstimatorProtocol
from vastu.domain.errors import InvalidBoundaryError, MissingAttributeRecordError
from vastu.domain.services.coverage import (
    ExactCoverageEstimator,
    MonteCarloCoverageEstimator,
    RadialBand,
    aggregate_by_main_direction,
)
from vastu.domain.services.sectors import (
    DirectionalCircle,
    build_directional_circle,
    build_sectors,
)
from vastu.domain.value_objects import (
    CANONICAL_SECTOR_COUNT,
    DirectionCoverage,
    MainDirection,
    SectorCoverage,
)

from .dtos import AnalysisOutput, AnalysisRequest

logger = logging.getLogger(__name__)

EstimatorFactory = Callable[[AnalysisRequest, RadialBand], CoverageEstimatorProtocol]


def build_estimator(request: AnalysisRequest, band: RadialBand) -> CoverageEstimatorProtocol:
    """Create the coverage estimator a request asks for, over one radial band."""
    if request.method == "exact":
        return ExactCoverageEstimator(band=band, arc_resolution=request.arc_resolution)
    return MonteCarloCoverageEstimator(
        samples_per_sector=request.samples_per_sector,
        band=band,
        seed=request.seed,
    )


class RunAnalysisCommand:
    """Command to measure a boundary and run directional analyses on it.

    Scoring always aggregates the canonical 32-sector partition so main
    directions own whole sectors; the requested granularity only shapes the
    reported sector table. Coverage is measured once per distinct radial band
    among the selected analyses; the reported table uses the first one.

    Args:
        estimator_factory: Builds a coverage estimator for a request and band.
    """

    def __init__(self, estimator_factory: EstimatorFactory | None = None) -> None:
        self.estimator_factory = estimator_factory or build_estimator

    def execute(self, request: AnalysisRequest) -> AnalysisOutput:
        """Execute the analysis command.

        Args:
            request: Boundary, partition, coverage and flag settings.

        Returns:
            AnalysisOutput with the partition, coverage and one report per
            analysis, or with ``errors`` set if the input is unusable.
        """
        errors = request.validate()
        if errors:
            return AnalysisOutput(errors=errors)

        try:
            canonical = build_directional_circle(
                request.boundary,
                count=CANONICAL_SECTOR_COUNT,
                rotation=request.north_rotation,
                center_mode=request.center_mode,
                radius=request.radius,
            )
        except InvalidBoundaryError as e:
            logger.warning(f"Cannot place directional circle: {e}")
            return AnalysisOutput(errors=[str(e)])

        circle = DirectionalCircle(
            center=canonical.center,
            radius=canonical.radius,
            rotation=canonical.rotation,
            sectors=build_sectors(request.granularity, request.north_rotation),
        )
        logger.debug(
            f"Circle at ({circle.center.x:.2f}, {circle.center.y:.2f}) "
            f"radius {circle.radius:.2f}, {circle.count} sectors"
        )

        measured: dict[RadialBand, dict[MainDirection, DirectionCoverage]] = {}
        output = AnalysisOutput(circle=circle)
        for definition in request.selected_analyses():
            band = request.resolve_band(definition.band)
            if band not in measured:
                fine = self._measure(request, canonical, band)
                measured[band] = aggregate_by_main_direction(canonical, fine)
            output.direction_coverage[definition.name] = measured[band]
            try:
                output.reports[definition.name] = definition.run(measured[band], request.flags)
            except MissingAttributeRecordError as e:
                output.errors.append(str(e))

        output.sector_coverage = self._measure(request, circle, request.display_band())
        return output

    def _measure(
        self,
        request: AnalysisRequest,
        circle: DirectionalCircle,
        band: RadialBand,
    ) -> dict[int, SectorCoverage]:
        estimator = self.estimator_factory(request, band)
        return estimator.estimate_all(circle, request.boundary)


__all__ = ["EstimatorFactory", "RunAnalysisCommand", "build_estimator"]
