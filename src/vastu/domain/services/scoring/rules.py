"""Scoring rules expressed as data.

A rule set is a plain, immutable description of how an analysis scores a
direction: which sub-scores exist, which rules contribute points to each,
which directions a rule applies to, and which thresholds classify the
result. Per-direction exceptions live in ``DirectionSet`` values and
``overrides`` maps, so a new rule variant is a new rule set rather than new
code.

Example:
    ```python
    heaviness = FlagRule(
        flag="heavy",
        when=False,
        directions=DirectionSet.of("S", "SW"),
        points=60,
        finding="heaviness_missing",
    )
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from vastu.domain.services.attributes import AttributeTable
from vastu.domain.value_objects import MainDirection, Severity, SeverityScale

from .constants import FLAG_NAMES, SCORE_MAX, SCORE_MIN
from .models import (
    NO_OUTCOME,
    DirectionAssessment,
    DirectionContext,
    Finding,
    Imbalance,
    RuleOutcome,
)


# =============================================================================
# Direction Sets
# =============================================================================


@dataclass(frozen=True)
class DirectionSet:
    """Immutable set of main directions a rule applies to."""

    members: frozenset[MainDirection]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "members", frozenset(MainDirection(d) for d in self.members)
        )

    @classmethod
    def of(cls, *directions: MainDirection | str) -> "DirectionSet":
        return cls(frozenset(MainDirection(d) for d in directions))

    @classmethod
    def all_directions(cls) -> "DirectionSet":
        return cls(frozenset(MainDirection))

    @classmethod
    def all_except(cls, *directions: MainDirection | str) -> "DirectionSet":
        excluded = {MainDirection(d) for d in directions}
        return cls(frozenset(d for d in MainDirection if d not in excluded))

    def __contains__(self, direction: object) -> bool:
        return direction in self.members

    def __iter__(self) -> Iterator[MainDirection]:
        return (d for d in MainDirection if d in self.members)

    def __len__(self) -> int:
        return len(self.members)


def _direction_map(values: Mapping[MainDirection | str, float]) -> Mapping[MainDirection, float]:
    return MappingProxyType({MainDirection(k): v for k, v in values.items()})


def _finding(code: str | None, context: DirectionContext, **params: object) -> tuple[Finding, ...]:
    if code is None:
        return ()
    return (Finding(code=code, direction=context.direction, params=params),)


def _compatibility(
    context: DirectionContext, usage: str, default: float, zero_as_missing: bool
) -> float:
    compatibility = context.record.compatibility(usage)
    if compatibility is None or (zero_as_missing and compatibility == 0):
        return default
    return compatibility


# =============================================================================
# Point Rules
# =============================================================================


@runtime_checkable
class ScoreRule(Protocol):
    """Protocol for rules contributing points to a sub-score."""

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        """Return the points and findings for one direction."""
        ...


@dataclass(frozen=True)
class FlagRule:
    """Add points when a situational flag has a given value.

    Attributes:
        flag: Flag name: ``heavy``, ``blocked``, ``clear`` or ``has_usage``.
        points: Points added when the rule fires.
        directions: Directions the rule applies to.
        when: Flag value that fires the rule.
        overrides: Per-direction replacement for ``points``.
        finding: Finding code emitted when the rule fires.
    """

    flag: str
    points: float
    directions: DirectionSet = field(default_factory=DirectionSet.all_directions)
    when: bool = True
    overrides: Mapping[MainDirection, float] = field(default_factory=dict)
    finding: str | None = None

    def __post_init__(self) -> None:
        if self.flag not in FLAG_NAMES:
            raise ValueError(f"Unknown flag '{self.flag}'; expected one of {sorted(FLAG_NAMES)}")
        object.__setattr__(self, "overrides", _direction_map(self.overrides))

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        if context.direction not in self.directions:
            return NO_OUTCOME
        if context.flags.flag(self.flag) != self.when:
            return NO_OUTCOME
        points = self.overrides.get(context.direction, self.points)
        return RuleOutcome(points, _finding(self.finding, context, points=points))


@dataclass(frozen=True)
class CoverageRule:
    """Add ``coverage/100 * weight`` points (or the uncovered share if inverted)."""

    weight: float
    invert: bool = False
    directions: DirectionSet = field(default_factory=DirectionSet.all_directions)

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        if context.direction not in self.directions:
            return NO_OUTCOME
        share = context.coverage_percent
        if self.invert:
            share = 100.0 - share
        return RuleOutcome(share / 100.0 * self.weight)


@dataclass(frozen=True)
class CompatibilityRule:
    """Add ``compatibility/100 * weight`` points for a declared usage.

    Compatibility comes from the record's usage table; usages not listed
    there score ``default_compatibility``. With ``zero_as_missing`` a listed
    compatibility of 0 also falls back to the default. Directions without a
    declared usage are left to other rules.
    """

    weight: float
    default_compatibility: float = 50.0
    zero_as_missing: bool = False

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        usage = context.flags.usage
        if usage is None:
            return NO_OUTCOME
        compatibility = _compatibility(
            context, usage, self.default_compatibility, self.zero_as_missing
        )
        return RuleOutcome(compatibility / 100.0 * self.weight)


@dataclass(frozen=True)
class ProhibitedUsageRule:
    """Penalize a declared usage that contains a prohibited keyword.

    Points are ``points + coverage/100 * coverage_weight``.
    """

    points: float
    coverage_weight: float = 0.0
    finding: str | None = "usage_prohibited"

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        usage = context.flags.usage
        if usage is None:
            return NO_OUTCOME
        keyword = context.record.matching_prohibited(usage)
        if keyword is None:
            return NO_OUTCOME
        total = self.points + context.coverage_percent / 100.0 * self.coverage_weight
        return RuleOutcome(total, _finding(self.finding, context, keyword=keyword))


@dataclass(frozen=True)
class IdealUsageRule:
    """Reward a declared usage that contains an ideal keyword."""

    points: float = 0.0
    finding: str | None = "usage_ideal"

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        usage = context.flags.usage
        if usage is None:
            return NO_OUTCOME
        keyword = context.record.matching_ideal(usage)
        if keyword is None:
            return NO_OUTCOME
        return RuleOutcome(self.points, _finding(self.finding, context, keyword=keyword))


@dataclass(frozen=True)
class CompatibilityDeficitRule:
    """Score how far a permitted usage falls short of full compatibility.

    Points are ``(100 - compatibility)/100 * coverage``. Usages matching a
    prohibited keyword are skipped so ``ProhibitedUsageRule`` owns them.
    """

    default_compatibility: float = 50.0
    zero_as_missing: bool = False

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        usage = context.flags.usage
        if usage is None or context.record.matching_prohibited(usage) is not None:
            return NO_OUTCOME
        compatibility = _compatibility(
            context, usage, self.default_compatibility, self.zero_as_missing
        )
        return RuleOutcome((100.0 - compatibility) / 100.0 * context.coverage_percent)


@dataclass(frozen=True)
class AreaDeviationRule:
    """Score the deviation of a direction's area share from its ideal.

    Points are ``(share - ideal) / scale * 100``; pair with signed sub-score
    bounds to clamp into [-100, 100]. With ``absolute`` the magnitude of the
    deviation is scored instead.

    Attributes:
        weight_name: Record weight holding the ideal percentage.
        scale: Deviation (in percentage points) that maps to a full score.
        tolerance: Minimum absolute deviation that emits a finding.
        excess_finding: Finding code for shares above the ideal.
        deficit_finding: Finding code for shares below the ideal.
        absolute: Score the magnitude of the deviation.
    """

    weight_name: str = "ideal_percentage"
    scale: float = 25.0
    tolerance: float = 5.0
    excess_finding: str | None = "area_excess"
    deficit_finding: str | None = "area_deficit"
    absolute: bool = False

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("scale must be positive")

    def evaluate(self, context: DirectionContext) -> RuleOutcome:
        if context.area_share is None:
            return NO_OUTCOME
        ideal = context.record.weight(self.weight_name)
        deviation = context.area_share - ideal
        findings: tuple[Finding, ...] = ()
        if abs(deviation) >= self.tolerance:
            code = self.excess_finding if deviation > 0 else self.deficit_finding
            findings = _finding(
                code,
                context,
                share=round(context.area_share, 1),
                ideal=ideal,
                deviation=round(deviation, 1),
            )
        points = abs(deviation) if self.absolute else deviation
        return RuleOutcome(points / self.scale * 100.0, findings)


# =============================================================================
# Score Definitions and Classification
# =============================================================================


@dataclass(frozen=True)
class ScoreBound:
    """Inclusive bound on a named sub-score."""

    score: str
    at_least: float | None = None
    at_most: float | None = None

    def holds(self, scores: Mapping[str, float]) -> bool:
        value = scores[self.score]
        if self.at_least is not None and value < self.at_least:
            return False
        if self.at_most is not None and value > self.at_most:
            return False
        return True


def _all_hold(bounds: Iterable[ScoreBound], scores: Mapping[str, float]) -> bool:
    return all(bound.holds(scores) for bound in bounds)


@dataclass(frozen=True)
class SubScoreDefinition:
    """A sub-score: a base value plus rule contributions, clamped then rounded."""

    name: str
    rules: tuple[ScoreRule, ...]
    base: float = 0.0
    lower: float = SCORE_MIN
    upper: float = SCORE_MAX

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"Sub-score '{self.name}' has lower bound above upper bound")


@dataclass(frozen=True)
class DerivedScore:
    """A sub-score computed as the rounded mean of earlier sub-scores."""

    name: str
    sources: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.sources:
            raise ValueError(f"Derived score '{self.name}' needs at least one source")


@dataclass(frozen=True)
class ClassificationCase:
    """One labelled case of a classification, chosen when all bounds hold."""

    label: str
    bounds: tuple[ScoreBound, ...]
    finding: str | None = None
    score: float | None = None


@dataclass(frozen=True)
class Classification:
    """First-match labelling of a direction from its sub-scores.

    Attributes:
        name: Key of the label in the assessment's ``labels``.
        cases: Cases tried in order.
        default: Label when no case matches.
        default_finding: Finding code emitted with the default label.
        default_score: Score of the default label.
        score_name: When set, each label's score is recorded as a sub-score
            under this name (and averaged into the overall scores).
    """

    name: str
    cases: tuple[ClassificationCase, ...]
    default: str
    default_finding: str | None = None
    default_score: float | None = None
    score_name: str | None = None

    def __post_init__(self) -> None:
        if self.score_name is not None:
            scores = [c.score for c in self.cases] + [self.default_score]
            if any(s is None for s in scores):
                raise ValueError(
                    f"Classification '{self.name}' records a score, so every case needs one"
                )

    def classify(self, scores: Mapping[str, float]) -> ClassificationCase:
        """Return the first matching case, or one built from the defaults."""
        for case in self.cases:
            if _all_hold(case.bounds, scores):
                return case
        return ClassificationCase(
            label=self.default,
            bounds=(),
            finding=self.default_finding,
            score=self.default_score,
        )


@dataclass(frozen=True)
class ScoreFinding:
    """Emit a finding for a direction whose scores satisfy all bounds."""

    code: str
    bounds: tuple[ScoreBound, ...]
    directions: DirectionSet = field(default_factory=DirectionSet.all_directions)

    def applies(self, direction: MainDirection, scores: Mapping[str, float]) -> bool:
        return direction in self.directions and _all_hold(self.bounds, scores)


# =============================================================================
# Report-level Findings
# =============================================================================


@dataclass(frozen=True)
class OverallFinding:
    """Emit a report finding when the overall scores satisfy all bounds."""

    code: str
    bounds: tuple[ScoreBound, ...] = ()

    def evaluate(self, overall_scores: Mapping[str, float]) -> tuple[Finding, ...]:
        if not _all_hold(self.bounds, overall_scores):
            return ()
        return (Finding(code=self.code),)


@dataclass(frozen=True)
class DirectionListFinding:
    """Emit a report finding listing the directions that match a filter.

    Nothing is emitted when no direction matches. Each filter left as None
    is ignored.

    Attributes:
        code: Finding code.
        directions: Directions eligible for the list.
        favorable: Required favorable flag of the assessment.
        severities: Accepted severity buckets; empty accepts any.
        flag: Situational flag to test.
        flag_value: Required value of ``flag``.
        bounds: Bounds the assessment's sub-scores must satisfy.
    """

    code: str
    directions: DirectionSet = field(default_factory=DirectionSet.all_directions)
    favorable: bool | None = None
    severities: frozenset[Severity] = frozenset()
    flag: str | None = None
    flag_value: bool = True
    bounds: tuple[ScoreBound, ...] = ()

    def __post_init__(self) -> None:
        if self.flag is not None and self.flag not in FLAG_NAMES:
            raise ValueError(f"Unknown flag '{self.flag}'; expected one of {sorted(FLAG_NAMES)}")

    def matches(self, assessment: DirectionAssessment) -> bool:
        if assessment.direction not in self.directions:
            return False
        if self.favorable is not None and assessment.favorable != self.favorable:
            return False
        if self.severities and assessment.severity not in self.severities:
            return False
        if self.flag is not None and assessment.flags.flag(self.flag) != self.flag_value:
            return False
        return _all_hold(self.bounds, assessment.scores)

    def evaluate(self, assessments: Iterable[DirectionAssessment]) -> tuple[Finding, ...]:
        matched = [a.direction for a in assessments if self.matches(a)]
        if not matched:
            return ()
        params = {
            "count": len(matched),
            "codes": ", ".join(d.value for d in matched),
            "directions": ", ".join(d.full_name for d in matched),
        }
        return (Finding(code=self.code, params=params),)


# =============================================================================
# Report Summaries
# =============================================================================


@dataclass(frozen=True)
class DeviationTier:
    """Severity of area deviations of at least ``at_least`` percentage points."""

    severity: Severity
    at_least: float


DEFAULT_DEVIATION_TIERS = (
    DeviationTier(Severity.CRITICAL, 15.0),
    DeviationTier(Severity.HIGH, 10.0),
    DeviationTier(Severity.MEDIUM, 7.0),
)


@dataclass(frozen=True)
class ImbalanceRanking:
    """Rank the directions whose area share strays from the ideal.

    Deviations smaller than ``tolerance`` are left out. The rest take the
    severity of the first tier they reach, or ``default`` below every tier.
    A deficit beyond the tolerance in ``top_on_deficit``, or an excess beyond
    it in ``top_on_excess``, always takes the first tier. The ranking is
    ordered by tier, then clockwise from north.

    Attributes:
        weight_name: Record weight holding the ideal percentage.
        tolerance: Minimum absolute deviation that is ranked.
        tiers: Severity tiers, most severe first.
        default: Severity below the last tier.
        top_on_excess: Directions whose excess always ranks in the first tier.
        top_on_deficit: Directions whose deficit always ranks in the first tier.
        finding: Report finding code emitted when anything is ranked.
    """

    weight_name: str = "ideal_percentage"
    tolerance: float = 5.0
    tiers: tuple[DeviationTier, ...] = DEFAULT_DEVIATION_TIERS
    default: Severity = Severity.LOW
    top_on_excess: DirectionSet = field(default_factory=lambda: DirectionSet.of())
    top_on_deficit: DirectionSet = field(default_factory=lambda: DirectionSet.of())
    finding: str | None = "imbalance_count"

    def __post_init__(self) -> None:
        if not self.tiers:
            raise ValueError("tiers must not be empty")
        thresholds = [tier.at_least for tier in self.tiers]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("tiers must be ordered from the highest threshold down")

    @property
    def order(self) -> tuple[Severity, ...]:
        return tuple(tier.severity for tier in self.tiers) + (self.default,)

    def severity_for(self, direction: MainDirection, deviation: float) -> Severity:
        if deviation < -self.tolerance and direction in self.top_on_deficit:
            return self.tiers[0].severity
        if deviation > self.tolerance and direction in self.top_on_excess:
            return self.tiers[0].severity
        for tier in self.tiers:
            if abs(deviation) >= tier.at_least:
                return tier.severity
        return self.default

    def rank(
        self, table: AttributeTable, assessments: Iterable[DirectionAssessment]
    ) -> tuple[Imbalance, ...]:
        imbalances: list[Imbalance] = []
        for assessment in assessments:
            if assessment.area_share is None:
                continue
            ideal = table[assessment.direction].weight(self.weight_name)
            deviation = assessment.area_share - ideal
            if abs(deviation) < self.tolerance:
                continue
            imbalances.append(
                Imbalance(
                    direction=assessment.direction,
                    identifier=assessment.identifier,
                    kind="excessive" if deviation > 0 else "deficient",
                    severity=self.severity_for(assessment.direction, deviation),
                    area_share=assessment.area_share,
                    ideal=ideal,
                    deviation=round(deviation, 1),
                )
            )
        order = self.order
        imbalances.sort(key=lambda i: (order.index(i.severity), i.direction.position))
        return tuple(imbalances)

    def evaluate(self, imbalances: Sequence[Imbalance]) -> tuple[Finding, ...]:
        if self.finding is None or not imbalances:
            return ()
        top = self.tiers[0].severity
        params = {
            "count": len(imbalances),
            "critical": sum(1 for i in imbalances if i.severity == top),
            "directions": ", ".join(i.direction.full_name for i in imbalances),
        }
        return (Finding(code=self.finding, params=params),)


@dataclass(frozen=True)
class ElementBalance:
    """Sum the area share of the directions ruled by each element.

    Every element in ``elements`` is reported, at zero when no measured
    direction carries it; record elements outside the list are appended.
    """

    elements: tuple[str, ...] = ("water", "ether", "fire", "earth", "air")

    def evaluate(
        self, table: AttributeTable, assessments: Iterable[DirectionAssessment]
    ) -> dict[str, float]:
        balance = dict.fromkeys(self.elements, 0.0)
        for assessment in assessments:
            element = table[assessment.direction].element
            if not element:
                continue
            balance.setdefault(element, 0.0)
            if assessment.area_share is not None:
                balance[element] += assessment.area_share
        return balance


# =============================================================================
# Rule Set
# =============================================================================


@dataclass(frozen=True)
class RuleSet:
    """Complete scoring configuration of one analysis.

    Attributes:
        name: Registry name of the analysis.
        title: Human-readable title.
        sub_scores: Rule-driven sub-scores, evaluated in order.
        primary: Name of the sub-score that drives severity.
        scale: Severity thresholds for the primary score.
        derived: Sub-scores averaged from earlier ones.
        classifications: Extra labels computed from the sub-scores.
        score_findings: Per-direction findings keyed off the sub-scores.
        report_findings: Findings over the whole report.
        ranking: Area imbalance ranking attached to the report.
        element_balance: Per-element area summary attached to the report.
        templates: Recommendation templates keyed by finding code.
    """

    name: str
    title: str
    sub_scores: tuple[SubScoreDefinition, ...]
    primary: str
    scale: SeverityScale
    derived: tuple[DerivedScore, ...] = ()
    classifications: tuple[Classification, ...] = ()
    score_findings: tuple[ScoreFinding, ...] = ()
    report_findings: tuple[OverallFinding | DirectionListFinding, ...] = ()
    ranking: ImbalanceRanking | None = None
    element_balance: ElementBalance | None = None
    templates: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        known: list[str] = []

        def add(name: str) -> None:
            if name in known:
                raise ValueError(f"Duplicate sub-score '{name}' in rule set '{self.name}'")
            known.append(name)

        for definition in self.sub_scores:
            add(definition.name)
        for derived in self.derived:
            missing = [s for s in derived.sources if s not in known]
            if missing:
                raise ValueError(
                    f"Derived score '{derived.name}' references unknown scores: {missing}"
                )
            add(derived.name)
        for classification in self.classifications:
            if classification.score_name is not None:
                add(classification.score_name)
        if self.primary not in known:
            raise ValueError(f"Primary score '{self.primary}' is not defined in '{self.name}'")
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

    @property
    def score_names(self) -> tuple[str, ...]:
        return (
            tuple(d.name for d in self.sub_scores)
            + tuple(d.name for d in self.derived)
            + tuple(c.score_name for c in self.classifications if c.score_name is not None)
        )


__all__ = [
    "AreaDeviationRule",
    "Classification",
    "ClassificationCase",
    "CompatibilityDeficitRule",
    "CompatibilityRule",
    "CoverageRule",
    "DEFAULT_DEVIATION_TIERS",
    "DerivedScore",
    "DirectionListFinding",
    "DirectionSet",
    "DeviationTier",
    "ElementBalance",
    "FlagRule",
    "IdealUsageRule",
    "ImbalanceRanking",
    "OverallFinding",
    "ProhibitedUsageRule",
    "RuleSet",
    "ScoreBound",
    "ScoreFinding",
    "ScoreRule",
    "SubScoreDefinition",
]
