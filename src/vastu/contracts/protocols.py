"""Service protocols for dependency injection.

These protocols describe the seams the application layer depends on, so
coverage estimation and recommendation text can be swapped without touching
the scoring rules.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vastu.domain.services.sectors import DirectionalCircle
    from vastu.domain.value_objects import Point2D, Sector, SectorCoverage


@runtime_checkable
class CoverageEstimatorProtocol(Protocol):
    """Protocol for sector coverage estimation.

    Implementations measure what share of each sector lies inside the
    boundary polygon, either by sampling or by exact clipping.
    """

    def estimate(
        self,
        circle: DirectionalCircle,
        sector: Sector,
        boundary: Sequence[Point2D],
    ) -> SectorCoverage:
        """Estimate coverage for a single sector."""
        ...

    def estimate_all(
        self,
        circle: DirectionalCircle,
        boundary: Sequence[Point2D],
    ) -> dict[int, SectorCoverage]:
        """Estimate coverage for every sector, keyed by sector index."""
        ...


@runtime_checkable
class RecommendationRendererProtocol(Protocol):
    """Protocol for turning scoring findings into text.

    Example:
        ```python
        class ShoutingRenderer:
            def render(self, code: str, context: Mapping[str, Any]) -> str | None:
                return f"{code.upper()} IN {context['direction']}"
        ```
    """

    def render(self, code: str, context: Mapping[str, Any]) -> str | None:
        """Render one finding, or return None to drop it."""
        ...


__all__ = ["CoverageEstimatorProtocol", "RecommendationRendererProtocol"]
