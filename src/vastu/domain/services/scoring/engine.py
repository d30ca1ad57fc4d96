"""Parameterized scoring engine.

One engine serves every analysis: it assembles a context per main
direction (attribute record, aggregated coverage, situational flags),
evaluates the rule set's sub-scores, classifies the primary score, averages
each sub-score over the eight directions, attaches any configured report
summaries and renders findings into recommendations.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from collections.abc import Iterable, Mapping

from vastu.contracts import RecommendationRendererProtocol
from vastu.domain.services.attributes import AttributeTable
from vastu.domain.value_objects import DirectionCoverage, MainDirection

from .models import (
    AnalysisReport,
    DirectionAssessment,
    DirectionContext,
    DirectionFlags,
    Finding,
    Imbalance,
)
from .recommendations import RecommendationWriter, direction_context, report_context
from .rules import DirectionListFinding, RuleSet

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def normalize_flags(
    flags: Mapping[MainDirection | str, DirectionFlags] | None,
) -> dict[MainDirection, DirectionFlags]:
    """Key flags by ``MainDirection``, filling unflagged directions with defaults.

    Raises:
        ValueError: If a key is not one of the eight direction codes.
    """
    result = {direction: DirectionFlags() for direction in MainDirection}
    for key, value in (flags or {}).items():
        result[MainDirection(key)] = value
    return result


def area_shares(
    coverage: Mapping[MainDirection, DirectionCoverage],
) -> dict[MainDirection, float | None]:
    """Percentage of the total covered area contributed by each direction."""
    total = sum(c.area_contribution for c in coverage.values() if c.has_coverage)
    shares: dict[MainDirection, float | None] = {}
    for direction in MainDirection:
        item = coverage.get(direction)
        if item is None or not item.has_coverage:
            shares[direction] = None
        else:
            shares[direction] = item.area_contribution / total * 100.0 if total > 0 else 0.0
    return shares


class ScoringEngine:
    """Evaluate a rule set against an attribute table and measured coverage.

    Args:
        rule_set: The analysis' scoring rules.
        renderer: Recommendation renderer; defaults to a RecommendationWriter
            over the rule set's templates.

    Example:
        ```python
        engine = ScoringEngine(LOSS_RULES)
        report = engine.assess(LOSS_TABLE, coverage, {"SW": DirectionFlags(heavy=True)})
        report.assessment("SW").favorable
        ```
    """

    def __init__(
        self,
        rule_set: RuleSet,
        renderer: RecommendationRendererProtocol | None = None,
    ) -> None:
        self.rule_set = rule_set
        self.renderer = renderer or RecommendationWriter(rule_set.templates)

    def assess(
        self,
        table: AttributeTable,
        coverage: Mapping[MainDirection, DirectionCoverage],
        flags: Mapping[MainDirection | str, DirectionFlags] | None = None,
    ) -> AnalysisReport:
        """Score all eight main directions and aggregate the result.

        Args:
            table: Attribute records for every main direction.
            coverage: Aggregated coverage per main direction. Missing
                directions are scored at neutral coverage.
            flags: Situational flags keyed by direction.

        Returns:
            The analysis report.

        Raises:
            MissingAttributeRecordError: If the table lacks a direction.
        """
        situation = normalize_flags(flags)
        shares = area_shares(coverage)

        assessments: dict[MainDirection, DirectionAssessment] = {}
        for direction in MainDirection:
            measured = coverage.get(direction)
            if measured is None or not measured.has_coverage:
                logger.warning(
                    f"{self.rule_set.name}: no coverage for {direction.value}, "
                    "scoring at neutral coverage"
                )
                measured = DirectionCoverage(direction, None, 0.0)
            context = DirectionContext(
                direction=direction,
                record=table[direction],
                coverage=measured,
                flags=situation[direction],
                area_share=shares[direction],
            )
            assessments[direction] = self.assess_direction(context)

        overall_scores = {
            name: round_half_up(sum(a.scores[name] for a in assessments.values()) / len(assessments))
            for name in self.rule_set.score_names
        }
        overall_severity = self.rule_set.scale.severity_for(overall_scores[self.rule_set.primary])

        findings: list[Finding] = []
        for rule in self.rule_set.report_findings:
            if isinstance(rule, DirectionListFinding):
                findings.extend(rule.evaluate(assessments.values()))
            else:
                findings.extend(rule.evaluate(overall_scores))
        imbalances: tuple[Imbalance, ...] = ()
        if self.rule_set.ranking is not None:
            imbalances = self.rule_set.ranking.rank(table, assessments.values())
            findings.extend(self.rule_set.ranking.evaluate(imbalances))
        element_balance: dict[str, float] = {}
        if self.rule_set.element_balance is not None:
            element_balance = self.rule_set.element_balance.evaluate(table, assessments.values())
        recommendations = self._render(
            (f, report_context(self.rule_set.title, overall_severity.value, overall_scores, f))
            for f in findings
        )

        logger.debug(
            f"{self.rule_set.name}: overall {self.rule_set.primary}="
            f"{overall_scores[self.rule_set.primary]} ({overall_severity.value})"
        )
        return AnalysisReport(
            analysis=self.rule_set.name,
            title=self.rule_set.title,
            assessments=assessments,
            overall_scores=overall_scores,
            primary_score=self.rule_set.primary,
            overall_severity=overall_severity,
            findings=tuple(findings),
            recommendations=recommendations,
            imbalances=imbalances,
            element_balance=element_balance,
        )

    def assess_direction(self, context: DirectionContext) -> DirectionAssessment:
        """Score a single direction."""
        rule_set = self.rule_set
        scores: dict[str, int] = {}
        findings: list[Finding] = []

        for definition in rule_set.sub_scores:
            total = definition.base
            for rule in definition.rules:
                outcome = rule.evaluate(context)
                total += outcome.points
                findings.extend(outcome.findings)
            clamped = min(definition.upper, max(definition.lower, total))
            scores[definition.name] = round_half_up(clamped)

        for derived in rule_set.derived:
            values = [scores[source] for source in derived.sources]
            scores[derived.name] = round_half_up(sum(values) / len(values))

        labels: dict[str, str] = {}
        for classification in rule_set.classifications:
            case = classification.classify(scores)
            labels[classification.name] = case.label
            if classification.score_name is not None and case.score is not None:
                scores[classification.score_name] = round_half_up(case.score)
            if case.finding is not None:
                findings.append(Finding(code=case.finding, direction=context.direction))

        for score_finding in rule_set.score_findings:
            if score_finding.applies(context.direction, scores):
                findings.append(Finding(code=score_finding.code, direction=context.direction))

        band = rule_set.scale.classify(scores[rule_set.primary])
        logger.debug(f"{rule_set.name}: {context.direction.value} scores {scores}")

        assessment = DirectionAssessment(
            direction=context.direction,
            identifier=context.record.identifier,
            scores=scores,
            primary_score=rule_set.primary,
            severity=band.severity,
            favorable=band.favorable,
            labels=labels,
            coverage_percent=context.coverage.coverage_percent,
            area_share=context.area_share,
            flags=context.flags,
            findings=tuple(findings),
        )
        recommendations = self._render(
            (f, direction_context(context.record, assessment, f)) for f in findings
        )
        return replace(assessment, recommendations=recommendations)

    def _render(self, items: Iterable[tuple[Finding, dict]]) -> tuple[str, ...]:
        rendered: list[str] = []
        for finding, context in items:
            text = self.renderer.render(finding.code, context)
            if text is not None and text not in rendered:
                rendered.append(text)
        return tuple(rendered)


__all__ = ["ScoringEngine", "area_shares", "normalize_flags", "round_half_up"]
