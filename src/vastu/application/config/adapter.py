"""Adapter to convert AnalysisConfiguration into application DTOs.

The schema stays a plain description of the input file; these functions
turn it into the boundary points, situational flags and AnalysisRequest
used by RunAnalysisCommand.
"""

from vastu.application.config.schema import AnalysisConfiguration
from vastu.application.dtos import AnalysisRequest
from vastu.domain.analyses import AnalysisDefinition
from vastu.domain.services.scoring import DirectionFlags
from vastu.domain.value_objects import MainDirection, Point2D


def config_to_boundary(config: AnalysisConfiguration) -> list[Point2D]:
    """Convert the configured boundary to domain points."""
    return [Point2D(point.x, point.y) for point in config.boundary]


def config_to_flags(config: AnalysisConfiguration) -> dict[MainDirection, DirectionFlags]:
    """Convert per-direction flags; unlisted directions get default flags."""
    flags = {direction: DirectionFlags() for direction in MainDirection}
    for direction, item in config.directions.items():
        flags[direction] = DirectionFlags(
            heavy=item.heavy,
            blocked=item.blocked,
            usage=item.usage,
        )
    return flags


def config_to_request(config: AnalysisConfiguration) -> AnalysisRequest:
    """Convert a validated configuration into an AnalysisRequest.

    Example:
        >>> config = load_config(Path("plan.json"))
        >>> output = RunAnalysisCommand().execute(config_to_request(config))
    """
    coverage = config.coverage
    return AnalysisRequest(
        boundary=config_to_boundary(config),
        north_rotation=config.north_rotation,
        granularity=config.granularity,
        center_mode=config.center_mode.value,
        radius=config.radius,
        flags=config_to_flags(config),
        analyses=list(config.analyses),
        method=coverage.method,
        samples_per_sector=coverage.samples_per_sector,
        seed=coverage.seed,
        inner_ratio=coverage.inner_ratio,
        outer_ratio=coverage.outer_ratio,
        arc_resolution=coverage.arc_resolution,
    )


def config_to_analyses(config: AnalysisConfiguration) -> list[AnalysisDefinition]:
    """Resolve the configured analyses; an empty list selects all of them."""
    return config_to_request(config).selected_analyses()


__all__ = [
    "config_to_analyses",
    "config_to_boundary",
    "config_to_flags",
    "config_to_request",
]
