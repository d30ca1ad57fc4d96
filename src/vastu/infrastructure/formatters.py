"""Output formatters and exporters for directional analysis results."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from vastu.application.dtos import AnalysisOutput
from vastu.domain.services.scoring import AnalysisReport, DirectionAssessment
from vastu.domain.value_objects import Sector, SectorCoverage


class SectorTableFormatter:
    """Formats a sector partition as a table.

    When coverage is supplied, a Coverage column shows the measured
    percentage of each sector.
    """

    def format(
        self,
        sectors: Sequence[Sector],
        coverage: Mapping[int, SectorCoverage] | None = None,
        title: str = "SECTORS",
    ) -> str:
        if not sectors:
            return "No sectors."

        header = (
            f"{'#':>3} {'Code':<6} {'Label':<6} {'Start':>8} {'End':>8} "
            f"{'Center':>8} {'Direction':<10}"
        )
        width = 64
        if coverage is not None:
            header += f" {'Coverage':>9}"
            width = 74
        lines = [title, "=" * width, header, "-" * width]

        for sector in sectors:
            line = (
                f"{sector.index:>3} {sector.direction_code:<6} {sector.direction_label:<6} "
                f"{sector.start_angle:>8.2f} {sector.end_angle:>8.2f} "
                f"{sector.center_angle:>8.2f} {sector.sector_group:<10}"
            )
            if coverage is not None:
                measured = coverage.get(sector.index)
                cell = f"{measured.coverage_percent:.1f}%" if measured else "-"
                line += f" {cell:>9}"
            lines.append(line)

        lines.append("-" * width)
        lines.append(f"{len(sectors)} sectors of {sectors[0].span:g} degrees")
        return "\n".join(lines)


class AnalysisReportFormatter:
    """Formats one analysis report for display.

    Example:
        ```python
        formatter = AnalysisReportFormatter()
        print(formatter.format(output.reports["loss"]))
        ```
    """

    def __init__(self, show_recommendations: bool = True) -> None:
        self._show_recommendations = show_recommendations

    def format(self, report: AnalysisReport) -> str:
        score_names = list(report.overall_scores)
        width = 34 + 12 * len(score_names)

        lines = [
            report.title.upper(),
            "=" * width,
            f"{'Dir':<4} {'Identifier':<12} {'Coverage':>8} "
            + " ".join(f"{name[:11]:>11}" for name in score_names)
            + f" {'Severity':<18}",
            "-" * width,
        ]
        for assessment in report.assessments.values():
            lines.append(self._format_row(assessment, score_names))

        lines.append("-" * width)
        lines.append(
            f"{'ALL':<4} {'':<12} {'':>8} "
            + " ".join(f"{report.overall_scores[name]:>11}" for name in score_names)
            + f" {report.overall_severity.value:<18}"
        )
        lines.append("")
        lines.append(report.summary)
        lines.extend(self._format_summaries(report))

        if self._show_recommendations:
            lines.extend(self._format_recommendations(report))
        return "\n".join(lines)

    def _format_row(self, assessment: DirectionAssessment, score_names: list[str]) -> str:
        coverage = (
            f"{assessment.coverage_percent:.1f}%" if assessment.has_coverage else "n/a"
        )
        marker = "" if assessment.favorable else " *"
        return (
            f"{assessment.direction.value:<4} {assessment.identifier[:12]:<12} {coverage:>8} "
            + " ".join(f"{assessment.scores[name]:>11}" for name in score_names)
            + f" {assessment.severity.value + marker:<18}"
        )

    def _format_summaries(self, report: AnalysisReport) -> list[str]:
        lines: list[str] = []
        if report.imbalances:
            lines.append("")
            lines.append("Imbalances:")
            for imbalance in report.imbalances:
                lines.append(
                    f"  {imbalance.severity.value.upper():<8} {imbalance.direction.value:<3} "
                    f"{imbalance.kind:<10} {imbalance.area_share:>5.1f}% "
                    f"(ideal {imbalance.ideal:g}%, {imbalance.deviation:+.1f})"
                )
        if report.element_balance:
            lines.append("")
            shares = ", ".join(
                f"{name} {share:.1f}%" for name, share in report.element_balance.items()
            )
            lines.append(f"Elements: {shares}")
        return lines

    def _format_recommendations(self, report: AnalysisReport) -> list[str]:
        lines: list[str] = []
        if report.recommendations:
            lines.append("")
            lines.append("Overall:")
            lines.extend(f"  - {text}" for text in report.recommendations)

        for assessment in report.assessments.values():
            if not assessment.recommendations:
                continue
            lines.append("")
            lines.append(f"{assessment.direction.full_name} ({assessment.identifier}):")
            lines.extend(f"  - {text}" for text in assessment.recommendations)
        return lines


class TextReportFormatter:
    """Formats a complete analysis run: circle, sector table and reports."""

    def __init__(
        self,
        sector_formatter: SectorTableFormatter | None = None,
        report_formatter: AnalysisReportFormatter | None = None,
    ) -> None:
        self._sectors = sector_formatter or SectorTableFormatter()
        self._reports = report_formatter or AnalysisReportFormatter()

    def format(self, output: AnalysisOutput) -> str:
        if not output.is_valid:
            return "\n".join(f"Error: {error}" for error in output.errors)

        circle = output.circle
        lines = [
            "DIRECTIONAL CIRCLE",
            "=" * 40,
            f"Center:   ({circle.center.x:.2f}, {circle.center.y:.2f})",
            f"Radius:   {circle.radius:.2f}",
            f"Rotation: {circle.rotation:g} degrees",
            "",
            self._sectors.format(circle.sectors, output.sector_coverage),
        ]
        for report in output.reports.values():
            lines.append("")
            lines.append(self._reports.format(report))
        return "\n".join(lines)


class JsonExporter:
    """Exports analysis results as JSON."""

    def export(self, output: AnalysisOutput) -> str:
        """Export analysis output as JSON string."""
        return json.dumps(self.to_dict(output), indent=2)

    def to_dict(self, output: AnalysisOutput) -> dict[str, Any]:
        if not output.is_valid:
            return {"errors": list(output.errors)}

        circle = output.circle
        return {
            "circle": {
                "center": {"x": circle.center.x, "y": circle.center.y},
                "radius": circle.radius,
                "rotation": circle.rotation,
                "sector_count": circle.count,
            },
            "sectors": [
                self._format_sector(sector, output.sector_coverage.get(sector.index))
                for sector in circle.sectors
            ],
            "analyses": {
                name: self._format_report(report) for name, report in output.reports.items()
            },
        }

    def _format_sector(self, sector: Sector, coverage: SectorCoverage | None) -> dict[str, Any]:
        result: dict[str, Any] = {
            "index": sector.index,
            "start_angle": sector.start_angle,
            "end_angle": sector.end_angle,
            "center_angle": sector.center_angle,
            "span": sector.span,
            "direction_label": sector.direction_label,
            "direction_code": sector.direction_code,
            "main_direction": sector.main_direction.value,
            "sector_group": sector.sector_group,
        }
        if coverage is not None:
            result["coverage_percent"] = coverage.coverage_percent
            result["area_contribution"] = coverage.area_contribution
            result["is_fully_covered"] = coverage.is_fully_covered
            result["is_majority_inside"] = coverage.is_majority_inside
        return result

    def _format_report(self, report: AnalysisReport) -> dict[str, Any]:
        return {
            "title": report.title,
            "primary_score": report.primary_score,
            "overall_scores": dict(report.overall_scores),
            "overall_severity": report.overall_severity.value,
            "favorable_directions": [d.value for d in report.favorable_directions],
            "unfavorable_directions": [d.value for d in report.unfavorable_directions],
            "directions": {
                direction.value: self._format_assessment(assessment)
                for direction, assessment in report.assessments.items()
            },
            "recommendations": list(report.recommendations),
            "imbalances": [
                {
                    "direction": imbalance.direction.value,
                    "identifier": imbalance.identifier,
                    "kind": imbalance.kind,
                    "severity": imbalance.severity.value,
                    "area_share": imbalance.area_share,
                    "ideal": imbalance.ideal,
                    "deviation": imbalance.deviation,
                }
                for imbalance in report.imbalances
            ],
            "element_balance": dict(report.element_balance),
        }

    def _format_assessment(self, assessment: DirectionAssessment) -> dict[str, Any]:
        return {
            "identifier": assessment.identifier,
            "scores": dict(assessment.scores),
            "severity": assessment.severity.value,
            "favorable": assessment.favorable,
            "labels": dict(assessment.labels),
            "coverage_percent": assessment.coverage_percent,
            "area_share": assessment.area_share,
            "flags": {
                "heavy": assessment.flags.heavy,
                "blocked": assessment.flags.blocked,
                "usage": assessment.flags.usage,
            },
            "findings": [finding.code for finding in assessment.findings],
            "recommendations": list(assessment.recommendations),
        }


__all__ = [
    "AnalysisReportFormatter",
    "JsonExporter",
    "SectorTableFormatter",
    "TextReportFormatter",
]
