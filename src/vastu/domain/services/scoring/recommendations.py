"""Recommendation text rendering.

Rendering is kept apart from the scoring numbers: the engine only emits
findings (a code plus parameters) and a renderer turns each into text. Swap
the template map to localize or restyle recommendations without touching any
rule.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from vastu.domain.services.attributes import DirectionalAttributeRecord

from .models import DirectionAssessment, Finding

logger = logging.getLogger(__name__)


class RecommendationWriter:
    """Render findings through ``str.format`` templates keyed by finding code.

    Codes without a template are skipped with a warning.

    Args:
        templates: Mapping of finding code to template string.

    Example:
        >>> writer = RecommendationWriter({"blocked": "Clear {direction}."})
        >>> writer.render("blocked", {"direction": "North"})
        'Clear North.'
    """

    def __init__(self, templates: Mapping[str, str]) -> None:
        self.templates = dict(templates)

    def render(self, code: str, context: Mapping[str, Any]) -> str | None:
        template = self.templates.get(code)
        if template is None:
            logger.warning(f"No recommendation template for finding '{code}'")
            return None
        try:
            return template.format_map(context)
        except KeyError as e:
            raise ValueError(f"Template '{code}' references unknown field {e}") from e

    def with_overrides(self, templates: Mapping[str, str]) -> "RecommendationWriter":
        """Copy of this writer with some templates replaced or added."""
        return RecommendationWriter({**self.templates, **templates})


def direction_context(
    record: DirectionalAttributeRecord,
    assessment: DirectionAssessment,
    finding: Finding,
) -> dict[str, Any]:
    """Template fields for a per-direction finding.

    Guidance strings, record weights, tag lists (joined, plus
    ``<tag>_first``), the rounded area share, sub-scores, classification
    labels and finding parameters are all available by name.
    """
    context: dict[str, Any] = {
        "direction": record.direction.full_name,
        "code": record.direction.value,
        "identifier": record.identifier,
        "title": record.title,
        "element": record.element,
        "usage": assessment.flags.usage or "",
        "severity": assessment.severity.value,
        "ideal_usage_hint": ", ".join(record.ideal_usage[:3]),
    }
    share = assessment.area_share
    context["area_share"] = round(share, 1) if share is not None else "n/a"
    context.update(record.weights)
    for name, values in record.tags.items():
        context[name] = ", ".join(values)
        context[f"{name}_first"] = values[0] if values else ""
    context.update(record.guidance)
    context.update(assessment.scores)
    context.update(assessment.labels)
    context.update(finding.params)
    return context


def report_context(
    title: str,
    severity: str,
    overall_scores: Mapping[str, int],
    finding: Finding,
) -> dict[str, Any]:
    """Template fields for a report-level finding."""
    context: dict[str, Any] = {"title": title, "severity": severity}
    context.update(overall_scores)
    context.update(finding.params)
    return context


__all__ = ["RecommendationWriter", "direction_context", "report_context"]
