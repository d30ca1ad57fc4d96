"""Severity classification value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Discrete classification derived from a continuous sub-score.

    Different analyses use different subsets: loss-type scores run from
    critical to minimal, benefit-type scores from excellent to
    needs_improvement, and signed balance scores from highly_excessive to
    highly_deficient.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MINIMAL = "minimal"
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    NEEDS_IMPROVEMENT = "needs_improvement"
    HIGHLY_EXCESSIVE = "highly_excessive"
    EXCESSIVE = "excessive"
    BALANCED = "balanced"
    DEFICIENT = "deficient"
    HIGHLY_DEFICIENT = "highly_deficient"


@dataclass(frozen=True)
class SeverityBand:
    """One threshold band of a severity scale.

    Attributes:
        severity: Bucket assigned to scores in this band.
        minimum: Inclusive lower bound, or None for the catch-all band.
        favorable: Whether a direction in this band is considered favorable.
    """

    severity: Severity
    minimum: float | None
    favorable: bool


@dataclass(frozen=True)
class SeverityScale:
    """Ordered threshold table mapping scores to severity buckets.

    Bands are checked from the highest minimum down; the final band must be
    the catch-all (``minimum=None``).

    Example:
        >>> scale = SeverityScale("loss", (
        ...     SeverityBand(Severity.CRITICAL, 80, False),
        ...     SeverityBand(Severity.MINIMAL, None, True),
        ... ))
        >>> scale.classify(80).severity
        <Severity.CRITICAL: 'critical'>
    """

    name: str
    bands: tuple[SeverityBand, ...]

    def __post_init__(self) -> None:
        if not self.bands:
            raise ValueError("Severity scale needs at least one band")
        if self.bands[-1].minimum is not None:
            raise ValueError("Last severity band must be the catch-all (minimum=None)")
        minimums = [band.minimum for band in self.bands[:-1]]
        if any(minimum is None for minimum in minimums):
            raise ValueError("Only the last severity band may omit its minimum")
        if any(a <= b for a, b in zip(minimums, minimums[1:])):  # type: ignore[operator]
            raise ValueError("Severity band minimums must be strictly descending")

    def classify(self, score: float) -> SeverityBand:
        """Return the first band whose minimum the score reaches."""
        for band in self.bands:
            if band.minimum is None or score >= band.minimum:
                return band
        return self.bands[-1]

    def severity_for(self, score: float) -> Severity:
        return self.classify(score).severity

    def is_favorable(self, score: float) -> bool:
        return self.classify(score).favorable
