"""Validation structures and analysis advisory checks.

Schema validation (types, ranges, known analyses) is handled by Pydantic.
The checks here look at the configuration as a whole: whether the boundary
can carry a sector analysis at all, and whether settings are likely to give
misleading results.
"""

from dataclasses import dataclass, field
from typing import Any

from vastu.application.config.adapter import (
    config_to_analyses,
    config_to_boundary,
    config_to_request,
)
from vastu.application.config.schema import AnalysisConfiguration
from vastu.domain.errors import InvalidBoundaryError
from vastu.domain.services.coverage import MIN_SAMPLES_PER_SECTOR
from vastu.domain.services.polygon import distance_to_boundary, point_in_polygon
from vastu.domain.services.sectors import build_directional_circle

# Analyses that read the declared usage of a direction
USAGE_ANALYSES: frozenset[str] = frozenset({"prosperity"})


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "boundary")
        message: Human-readable description of the error
        value: The invalid value that caused the error
        reason: Machine-readable cause, e.g. "invalid_radius" for boundaries
    """

    path: str
    message: str
    value: Any = None
    reason: str | None = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None, reason: str | None = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value, reason=reason))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_boundary(config: AnalysisConfiguration) -> ValidationResult:
    """Check that the boundary supports a directional circle.

    A degenerate polygon (zero area with the centroid center, or a zero
    inscribed radius) is an error. A circle center outside the boundary is a
    warning, since sectors then measure mostly empty space on one side.
    """
    result = ValidationResult()
    boundary = config_to_boundary(config)
    try:
        circle = build_directional_circle(
            boundary,
            count=config.granularity,
            rotation=config.north_rotation,
            center_mode=config.center_mode,
            radius=config.radius,
        )
    except InvalidBoundaryError as e:
        return result.add_error("boundary", str(e), reason=e.reason)

    if not point_in_polygon(circle.center, boundary):
        distance = distance_to_boundary(circle.center, boundary)
        result.add_warning(
            "center_mode",
            (
                f"Circle center ({circle.center.x:.1f}, {circle.center.y:.1f}) lies "
                f"outside the boundary ({distance:.1f} units away)"
            ),
            suggestion="Use center_mode 'centroid' or split the plan into convex parts",
        )
    return result


def check_coverage_advisories(config: AnalysisConfiguration) -> ValidationResult:
    """Check coverage settings for noisy or ignored values."""
    result = ValidationResult()
    coverage = config.coverage

    if coverage.method == "monte_carlo" and coverage.samples_per_sector < MIN_SAMPLES_PER_SECTOR:
        result.add_warning(
            "coverage.samples_per_sector",
            (
                f"Only {coverage.samples_per_sector} samples per sector; coverage "
                "estimates will be very noisy"
            ),
            suggestion=f"Use at least {MIN_SAMPLES_PER_SECTOR} samples per sector",
        )
    if coverage.method == "exact" and coverage.seed is not None:
        result.add_warning(
            "coverage.seed",
            "Seed has no effect with the exact coverage method",
        )

    request = config_to_request(config)
    for definition in request.selected_analyses():
        try:
            request.resolve_band(definition.band)
        except ValueError as e:
            result.add_error("coverage", f"Analysis '{definition.name}': {e}")
    return result


def check_direction_advisories(config: AnalysisConfiguration) -> ValidationResult:
    """Check that the situational flags will influence the selected analyses."""
    result = ValidationResult()
    flagged = [
        direction
        for direction, item in config.directions.items()
        if item.heavy or item.blocked or item.usage
    ]
    if not flagged:
        result.add_warning(
            "directions",
            "No direction is flagged heavy, blocked or with a usage",
            suggestion="Describe the plan's heavy, blocked and used directions",
        )

    selected = {definition.name for definition in config_to_analyses(config)}
    if not selected & USAGE_ANALYSES:
        for direction, item in config.directions.items():
            if item.usage:
                result.add_warning(
                    f"directions.{direction.value}.usage",
                    f"Usage '{item.usage}' is ignored by the selected analyses",
                    suggestion=f"Add one of {sorted(USAGE_ANALYSES)} to analyses",
                )

    duplicates = sorted({name for name in config.analyses if config.analyses.count(name) > 1})
    if duplicates:
        result.add_warning("analyses", f"Analyses listed more than once: {duplicates}")
    return result


def validate_config(config: AnalysisConfiguration) -> ValidationResult:
    """Perform full validation of an analysis configuration.

    Args:
        config: An AnalysisConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_boundary(config))
    result.merge(check_coverage_advisories(config))
    result.merge(check_direction_advisories(config))
    return result


__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_boundary",
    "check_coverage_advisories",
    "check_direction_advisories",
    "validate_config",
]
