"""Analysis definitions and registry.

An analysis is pure configuration: an attribute table, a rule set and the
radial band its coverage is sampled over. Analysis modules register their
definition with ``AnalysisRegistry`` when imported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from vastu.contracts import RecommendationRendererProtocol
from vastu.domain.services.attributes import AttributeTable
from vastu.domain.services.coverage import RadialBand
from vastu.domain.services.scoring import (
    AnalysisReport,
    DirectionFlags,
    RuleSet,
    ScoringEngine,
)
from vastu.domain.value_objects import DirectionCoverage, MainDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisDefinition:
    """Configuration of one directional analysis.

    Attributes:
        name: Registry name (e.g. "loss").
        description: One-line description for listings.
        table: Attribute records for the eight main directions.
        rule_set: Scoring rules.
        band: Radial band used when measuring coverage for this analysis.
    """

    name: str
    description: str
    table: AttributeTable
    rule_set: RuleSet
    band: RadialBand = field(default_factory=RadialBand)

    def __post_init__(self) -> None:
        if self.name != self.rule_set.name:
            raise ValueError(
                f"Analysis name '{self.name}' does not match rule set '{self.rule_set.name}'"
            )

    @property
    def title(self) -> str:
        return self.rule_set.title

    def run(
        self,
        coverage: Mapping[MainDirection, DirectionCoverage],
        flags: Mapping[MainDirection | str, DirectionFlags] | None = None,
        renderer: RecommendationRendererProtocol | None = None,
    ) -> AnalysisReport:
        """Score measured coverage and flags with this analysis' rules."""
        return ScoringEngine(self.rule_set, renderer).assess(self.table, coverage, flags)


class AnalysisRegistry:
    """Registry of available analyses, keyed by name.

    Example:
        ```python
        definition = AnalysisRegistry.get("loss")
        report = definition.run(coverage, flags)
        ```
    """

    _definitions: ClassVar[dict[str, AnalysisDefinition]] = {}

    @classmethod
    def register(cls, definition: AnalysisDefinition) -> AnalysisDefinition:
        if definition.name in cls._definitions:
            logger.warning(f"Overwriting existing analysis '{definition.name}'")
        cls._definitions[definition.name] = definition
        logger.debug(f"Registered analysis '{definition.name}'")
        return definition

    @classmethod
    def get(cls, name: str) -> AnalysisDefinition:
        """Look up an analysis by name.

        Raises:
            KeyError: If no analysis is registered under ``name``.
        """
        if name not in cls._definitions:
            available = ", ".join(cls.available()) or "none"
            raise KeyError(f"Unknown analysis '{name}'. Available analyses: {available}")
        return cls._definitions[name]

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls._definitions)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._definitions


__all__ = ["AnalysisDefinition", "AnalysisRegistry"]
