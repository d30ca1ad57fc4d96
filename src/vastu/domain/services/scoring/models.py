"""Scoring data models and result types.

This module contains the inputs the engine evaluates per direction
(situational flags and the assembled context) and the assessment and
report types it returns.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from vastu.domain.services.attributes import DirectionalAttributeRecord
from vastu.domain.value_objects import (
    DirectionCoverage,
    MainDirection,
    Severity,
)

from .constants import FLAG_NAMES, NEUTRAL_COVERAGE


@dataclass(frozen=True)
class DirectionFlags:
    """Caller-supplied situation of one direction.

    Attributes:
        heavy: A heavy structure (stairs, overhead tank, thick walls) is present.
        blocked: The direction is blocked (no openings, clutter, walls).
        usage: Declared room usage, e.g. "Kitchen" or "Master Bedroom".
    """

    heavy: bool = False
    blocked: bool = False
    usage: str | None = None

    def __post_init__(self) -> None:
        if self.usage is not None:
            usage = self.usage.strip()
            object.__setattr__(self, "usage", usage or None)

    @property
    def clear(self) -> bool:
        """Neither heavy nor blocked."""
        return not self.heavy and not self.blocked

    @property
    def has_usage(self) -> bool:
        return self.usage is not None

    def flag(self, name: str) -> bool:
        """Read a flag by name.

        Raises:
            ValueError: If ``name`` is not a known flag.
        """
        if name not in FLAG_NAMES:
            raise ValueError(f"Unknown flag '{name}'; expected one of {sorted(FLAG_NAMES)}")
        return bool(getattr(self, name))


@dataclass(frozen=True)
class Finding:
    """A condition detected while scoring, rendered later as a recommendation.

    Attributes:
        code: Template key, e.g. "heaviness_missing".
        direction: Direction the finding is about, or None for report-level
            findings.
        params: Extra values available to the template.
    """

    code: str
    direction: MainDirection | None = None
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RuleOutcome:
    """Points and findings produced by one rule for one direction."""

    points: float = 0.0
    findings: tuple[Finding, ...] = ()


NO_OUTCOME = RuleOutcome()


@dataclass(frozen=True)
class DirectionContext:
    """Everything a rule may look at for one direction.

    Attributes:
        direction: The direction being scored.
        record: The analysis' attribute record for the direction.
        coverage: Aggregated coverage of the direction's sectors.
        flags: Situational flags supplied by the caller.
        area_share: Percentage of the total covered area that falls in this
            direction, or None when the direction has no measured sectors.
    """

    direction: MainDirection
    record: DirectionalAttributeRecord
    coverage: DirectionCoverage
    flags: DirectionFlags
    area_share: float | None = None

    @property
    def coverage_percent(self) -> float:
        """Measured coverage, or the neutral value when nothing was measured."""
        if self.coverage.coverage_percent is None:
            return NEUTRAL_COVERAGE
        return self.coverage.coverage_percent


@dataclass(frozen=True)
class DirectionAssessment:
    """Scoring result for one main direction.

    Attributes:
        direction: The scored direction.
        identifier: Identifier of the attribute record used.
        scores: Rounded sub-scores by name.
        primary_score: Name of the sub-score the severity derives from.
        severity: Severity bucket of the primary score.
        favorable: Whether the severity bucket is favorable.
        labels: Classification labels by classification name.
        coverage_percent: Measured coverage, None if nothing was measured.
        area_share: Share of the total covered area, None if unmeasured.
        flags: The situational flags that were applied.
        findings: Conditions detected while scoring.
        recommendations: Rendered recommendation strings.
    """

    direction: MainDirection
    identifier: str
    scores: Mapping[str, int]
    primary_score: str
    severity: Severity
    favorable: bool
    labels: Mapping[str, str] = field(default_factory=dict)
    coverage_percent: float | None = None
    area_share: float | None = None
    flags: DirectionFlags = field(default_factory=DirectionFlags)
    findings: tuple[Finding, ...] = ()
    recommendations: tuple[str, ...] = ()

    @property
    def score(self) -> int:
        """The primary sub-score."""
        return self.scores[self.primary_score]

    @property
    def has_coverage(self) -> bool:
        return self.coverage_percent is not None


@dataclass(frozen=True)
class Imbalance:
    """A direction whose area share strays from its ideal.

    Attributes:
        direction: The imbalanced direction.
        identifier: Identifier of the direction's attribute record.
        kind: "excessive" or "deficient".
        severity: Ranking tier, critical to low.
        area_share: Measured share of the covered area.
        ideal: Ideal share for the direction.
        deviation: Share minus ideal, rounded to one decimal.
    """

    direction: MainDirection
    identifier: str
    kind: str
    severity: Severity
    area_share: float
    ideal: float
    deviation: float


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregate result of one analysis over the eight main directions.

    Attributes:
        analysis: Registry name of the analysis.
        title: Human-readable analysis title.
        assessments: Per-direction assessments, clockwise from north.
        overall_scores: Rounded mean of each sub-score over all directions.
        primary_score: Name of the sub-score driving severity.
        overall_severity: Severity of the overall primary score.
        findings: Report-level findings.
        recommendations: Rendered report-level recommendations.
        imbalances: Ranked area imbalances, most severe first.
        element_balance: Summed area share per element.
    """

    analysis: str
    title: str
    assessments: Mapping[MainDirection, DirectionAssessment]
    overall_scores: Mapping[str, int]
    primary_score: str
    overall_severity: Severity
    findings: tuple[Finding, ...] = ()
    recommendations: tuple[str, ...] = ()
    imbalances: tuple[Imbalance, ...] = ()
    element_balance: Mapping[str, float] = field(default_factory=dict)

    @property
    def overall_score(self) -> int:
        return self.overall_scores[self.primary_score]

    def assessment(self, direction: MainDirection | str) -> DirectionAssessment:
        return self.assessments[MainDirection(direction)]

    @property
    def favorable_directions(self) -> list[MainDirection]:
        return [d for d, a in self.assessments.items() if a.favorable]

    @property
    def unfavorable_directions(self) -> list[MainDirection]:
        return [d for d, a in self.assessments.items() if not a.favorable]

    def directions_with(self, severity: Severity) -> list[MainDirection]:
        return [d for d, a in self.assessments.items() if a.severity == severity]

    @property
    def summary(self) -> str:
        """One-line summary of the overall result."""
        return (
            f"{self.title}: overall {self.primary_score} {self.overall_score} "
            f"({self.overall_severity.value}), "
            f"{len(self.favorable_directions)} favorable, "
            f"{len(self.unfavorable_directions)} need attention"
        )


__all__ = [
    "AnalysisReport",
    "DirectionAssessment",
    "DirectionContext",
    "DirectionFlags",
    "Finding",
    "Imbalance",
    "NO_OUTCOME",
    "RuleOutcome",
]
