"""Scoring and classification engine.

Every analysis is a ``RuleSet`` (sub-score rules, severity thresholds and
recommendation templates) evaluated by the shared ``ScoringEngine``.

Example:
    ```python
    from vastu.domain.services.scoring import DirectionFlags, ScoringEngine

    engine = ScoringEngine(rule_set)
    report = engine.assess(table, coverage, {"NE": DirectionFlags(heavy=True)})
    print(report.summary)
    ```
"""

from .constants import (
    FLAG_NAMES,
    NEUTRAL_COVERAGE,
    SCORE_MAX,
    SCORE_MIN,
    SIGNED_SCORE_MAX,
    SIGNED_SCORE_MIN,
)
from .engine import ScoringEngine, area_shares, normalize_flags, round_half_up
from .models import (
    AnalysisReport,
    DirectionAssessment,
    DirectionContext,
    DirectionFlags,
    Finding,
    Imbalance,
    RuleOutcome,
)
from .recommendations import RecommendationWriter
from .rules import (
    AreaDeviationRule,
    Classification,
    ClassificationCase,
    CompatibilityDeficitRule,
    CompatibilityRule,
    CoverageRule,
    DEFAULT_DEVIATION_TIERS,
    DerivedScore,
    DeviationTier,
    DirectionListFinding,
    DirectionSet,
    ElementBalance,
    FlagRule,
    IdealUsageRule,
    ImbalanceRanking,
    OverallFinding,
    ProhibitedUsageRule,
    RuleSet,
    ScoreBound,
    ScoreFinding,
    ScoreRule,
    SubScoreDefinition,
)

__all__ = [
    # Constants
    "FLAG_NAMES",
    "NEUTRAL_COVERAGE",
    "SCORE_MAX",
    "SCORE_MIN",
    "SIGNED_SCORE_MAX",
    "SIGNED_SCORE_MIN",
    # Engine
    "ScoringEngine",
    "area_shares",
    "normalize_flags",
    "round_half_up",
    # Models
    "AnalysisReport",
    "DirectionAssessment",
    "DirectionContext",
    "DirectionFlags",
    "Finding",
    "Imbalance",
    "RuleOutcome",
    # Rendering
    "RecommendationWriter",
    # Rules
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
