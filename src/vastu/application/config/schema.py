"""Pydantic configuration schema models for directional zone analysis.

This module defines the schema of JSON analysis configuration files. It uses
Pydantic v2 for validation and serialization.

The MainDirection and CenterMode enums are reused from the domain layer to
keep direction codes and center modes consistent.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vastu.domain.analyses import AnalysisRegistry
from vastu.domain.services.coverage import DEFAULT_ARC_RESOLUTION, DEFAULT_SAMPLES_PER_SECTOR
from vastu.domain.services.sectors import CenterMode
from vastu.domain.value_objects import MainDirection

# Supported schema versions for configuration files
# Version 1.0: Boundary, sector partition, coverage and direction flags
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PointConfig(BaseModel):
    """A boundary vertex in image coordinates (+Y points down).

    Accepts either an object ``{"x": 1, "y": 2}`` or a two-element array
    ``[1, 2]``.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.
    """

    model_config = ConfigDict(extra="forbid")

    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def accept_pairs(cls, data: Any) -> Any:
        """Convert ``[x, y]`` arrays into the object form."""
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError("Point arrays must have exactly two coordinates")
            return {"x": data[0], "y": data[1]}
        return data


class CoverageConfig(BaseModel):
    """Coverage estimation settings.

    The radial band defaults to each analysis' own band; setting either ratio
    here overrides it for every analysis.

    Attributes:
        method: "monte_carlo" for sampling or "exact" for polygon clipping.
        samples_per_sector: Points drawn per sector by the sampler.
        seed: Optional seed making sampled coverage reproducible.
        inner_ratio: Inner edge of the radial band as a fraction of the radius.
        outer_ratio: Outer edge of the radial band as a fraction of the radius.
        arc_resolution: Segments used to approximate each wedge arc (exact only).
    """

    model_config = ConfigDict(extra="forbid")

    method: Literal["monte_carlo", "exact"] = "monte_carlo"
    samples_per_sector: int = Field(default=DEFAULT_SAMPLES_PER_SECTOR, ge=1, le=100_000)
    seed: int | None = None
    inner_ratio: float | None = Field(default=None, ge=0, lt=1)
    outer_ratio: float | None = Field(default=None, gt=0, le=1)
    arc_resolution: int = Field(default=DEFAULT_ARC_RESOLUTION, ge=1, le=1024)

    @model_validator(mode="after")
    def validate_band(self) -> "CoverageConfig":
        """Validate that the inner edge lies inside the outer edge."""
        if (
            self.inner_ratio is not None
            and self.outer_ratio is not None
            and self.inner_ratio >= self.outer_ratio
        ):
            raise ValueError("inner_ratio must be smaller than outer_ratio")
        return self


class DirectionFlagsConfig(BaseModel):
    """Situational flags for one main direction.

    Attributes:
        heavy: Heavy construction is present.
        blocked: The direction is blocked or obstructed.
        usage: Declared room usage, e.g. "kitchen".
    """

    model_config = ConfigDict(extra="forbid")

    heavy: bool = False
    blocked: bool = False
    usage: str | None = Field(default=None, max_length=100)


class AnalysisConfiguration(BaseModel):
    """Root configuration model for a directional analysis.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0").
        name: Optional label for the analysed plan.
        boundary: Boundary polygon vertices, at least three.
        north_rotation: North bearing in degrees.
        granularity: Sector count of the reported partition (8, 16 or 32).
        center_mode: Circle center, bounding-box center or polygon centroid.
        radius: Explicit circle radius; defaults to the inscribed radius.
        coverage: Coverage estimation settings.
        directions: Situational flags keyed by main direction code.
        analyses: Analyses to run; empty runs every registered analysis.

    Example:
        >>> config = AnalysisConfiguration(
        ...     schema_version="1.0",
        ...     boundary=[[0, 0], [100, 0], [100, 100], [0, 100]],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str | None = Field(default=None, description="Plan label (optional)")
    boundary: list[PointConfig] = Field(..., min_length=3, description="Boundary polygon")
    north_rotation: float = Field(default=0.0, ge=-360, le=360)
    granularity: Literal[8, 16, 32] = 32
    center_mode: CenterMode = CenterMode.BOUNDING_BOX
    radius: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    directions: dict[MainDirection, DirectionFlagsConfig] = Field(default_factory=dict)
    analyses: list[str] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that the schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("analyses")
    @classmethod
    def validate_known_analyses(cls, v: list[str]) -> list[str]:
        """Validate that every analysis name is registered."""
        unknown = [name for name in v if not AnalysisRegistry.is_registered(name)]
        if unknown:
            raise ValueError(
                f"Unknown analyses {unknown}. "
                f"Available analyses: {AnalysisRegistry.available()}"
            )
        return v


__all__ = [
    "AnalysisConfiguration",
    "CoverageConfig",
    "DirectionFlagsConfig",
    "PointConfig",
    "SUPPORTED_VERSIONS",
]
