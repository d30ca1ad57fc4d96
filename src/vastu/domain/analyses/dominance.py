"""Area dominance analysis (Division of Devta).

Every main direction ideally holds an equal eighth of the built area. The
signed dominance score measures how far a direction's share of the covered
area sits above (positive) or below (negative) that ideal, and the imbalance
score measures the magnitude of the deviation. Directions straying by at
least five points are ranked critical to low, and the shares are summed per
element. Coverage for this analysis is sampled over the wider [0.2R, 1.0R]
band.
"""

from __future__ import annotations

from vastu.domain.services.attributes import AttributeTable, DirectionalAttributeRecord
from vastu.domain.services.coverage import RadialBand
from vastu.domain.services.scoring import (
    SIGNED_SCORE_MAX,
    SIGNED_SCORE_MIN,
    AreaDeviationRule,
    DirectionListFinding,
    DirectionSet,
    ElementBalance,
    ImbalanceRanking,
    OverallFinding,
    RuleSet,
    ScoreBound,
    ScoreFinding,
    SubScoreDefinition,
)
from vastu.domain.value_objects import (
    MainDirection,
    Severity,
    SeverityBand,
    SeverityScale,
)

from .base import AnalysisDefinition, AnalysisRegistry

# =============================================================================
# Rule Data
# =============================================================================

IDEAL_PERCENTAGE = 12.5

# Deviation in percentage points mapped to a full +/-100 score
DEVIATION_SCALE = 25.0

# Deviations below this many percentage points are not reported individually
DEVIATION_TOLERANCE = 5.0

DOMINANCE_SCALE = SeverityScale(
    name="dominance",
    bands=(
        SeverityBand(Severity.HIGHLY_EXCESSIVE, 40, favorable=False),
        SeverityBand(Severity.EXCESSIVE, 15, favorable=False),
        SeverityBand(Severity.BALANCED, -15, favorable=True),
        SeverityBand(Severity.DEFICIENT, -40, favorable=False),
        SeverityBand(Severity.HIGHLY_DEFICIENT, None, favorable=False),
    ),
)

EXCESS_HARMFUL = DirectionSet.of("N", "NE", "E", "NW")
DEFICIT_HARMFUL = DirectionSet.of("S", "SW")
DEFICIT_WEAKENING = DirectionSet.of("N", "W")

_EXCESSIVE = ScoreBound("dominance", at_least=15)
_DEFICIENT = ScoreBound("dominance", at_most=-16)
_BALANCED = ScoreBound("dominance", at_least=-15, at_most=14)

DOMINANCE_TEMPLATES = {
    "area_excess": (
        "Excessive {identifier} influence ({share}%) may over-emphasize {aspects_pair} "
        "in {direction}."
    ),
    "area_deficit": "Deficient {identifier} influence ({share}%) weakens {aspects_pair}.",
    "reduce_construction": (
        "Reduce construction in {direction}. Current {area_share}% exceeds ideal "
        "{ideal_percentage}%."
    ),
    "northeast_excess": (
        "URGENT: Remove heavy structures from Northeast. Keep it open and elevated."
    ),
    "increase_construction": (
        "CRITICAL: Increase construction in {direction}. Current {area_share}% below "
        "ideal {ideal_percentage}%."
    ),
    "enhance_area": (
        "Enhance {direction} area. Current {area_share}% below ideal {ideal_percentage}%."
    ),
    "maintain_balance": "Maintain current balance in {direction} ({area_share}%).",
    "summary": (
        "Overall Devta Imbalance: {imbalance}/100 | Mean Dominance: {dominance}"
    ),
    "excessive_directions": (
        "Excessive dominance: {directions}. Reduce construction in these areas."
    ),
    "deficient_directions": "Deficient presence: {directions}. Enhance these areas.",
    "northeast_dominant": (
        "CRITICAL: Northeast exceeds its ideal share. Remove heavy construction!"
    ),
    "southwest_deficient": (
        "CRITICAL: Southwest is below its ideal share. Add heavy construction!"
    ),
    "imbalance_count": (
        "{count} Devta imbalance(s) detected ({critical} critical): {directions}."
    ),
}

DOMINANCE_RULES = RuleSet(
    name="dominance",
    title="Devta Dominance",
    sub_scores=(
        SubScoreDefinition(
            name="dominance",
            rules=(
                AreaDeviationRule(
                    scale=DEVIATION_SCALE,
                    tolerance=DEVIATION_TOLERANCE,
                ),
            ),
            lower=SIGNED_SCORE_MIN,
            upper=SIGNED_SCORE_MAX,
        ),
        SubScoreDefinition(
            name="imbalance",
            rules=(
                AreaDeviationRule(
                    scale=DEVIATION_SCALE,
                    excess_finding=None,
                    deficit_finding=None,
                    absolute=True,
                ),
            ),
        ),
    ),
    primary="dominance",
    scale=DOMINANCE_SCALE,
    score_findings=(
        ScoreFinding("reduce_construction", (_EXCESSIVE,), EXCESS_HARMFUL),
        ScoreFinding("northeast_excess", (_EXCESSIVE,), DirectionSet.of("NE")),
        ScoreFinding("increase_construction", (_DEFICIENT,), DEFICIT_HARMFUL),
        ScoreFinding("enhance_area", (_DEFICIENT,), DEFICIT_WEAKENING),
        ScoreFinding("maintain_balance", (_BALANCED,)),
    ),
    report_findings=(
        OverallFinding("summary"),
        DirectionListFinding(
            "excessive_directions",
            severities=frozenset({Severity.HIGHLY_EXCESSIVE, Severity.EXCESSIVE}),
        ),
        DirectionListFinding(
            "deficient_directions",
            severities=frozenset({Severity.DEFICIENT, Severity.HIGHLY_DEFICIENT}),
        ),
        DirectionListFinding(
            "northeast_dominant",
            directions=DirectionSet.of("NE"),
            bounds=(_EXCESSIVE,),
        ),
        DirectionListFinding(
            "southwest_deficient",
            directions=DirectionSet.of("SW"),
            bounds=(_DEFICIENT,),
        ),
    ),
    ranking=ImbalanceRanking(
        tolerance=DEVIATION_TOLERANCE,
        top_on_excess=DirectionSet.of("NE"),
        top_on_deficit=DEFICIT_HARMFUL,
    ),
    element_balance=ElementBalance(),
    templates=DOMINANCE_TEMPLATES,
)

# =============================================================================
# Attribute Table
# =============================================================================


def _record(
    direction: str,
    deity: str,
    element: str,
    qualities: tuple[str, ...],
    aspects: tuple[str, ...],
    color: str,
    planetary_ruler: str,
) -> DirectionalAttributeRecord:
    return DirectionalAttributeRecord(
        direction=MainDirection(direction),
        identifier=deity,
        title=qualities[0],
        element=element,
        weights={"ideal_percentage": IDEAL_PERCENTAGE},
        tags={"qualities": qualities, "aspects": aspects},
        guidance={
            "aspects_pair": " and ".join(a.lower() for a in aspects[:2]),
            "color": color,
            "planetary_ruler": planetary_ruler,
        },
    )


DOMINANCE_TABLE = AttributeTable(
    "dominance",
    [
        _record(
            "N",
            "Kubera",
            "water",
            ("Wealth", "Prosperity", "Abundance", "Material success"),
            ("Income", "Cash flow", "Business growth", "Financial stability"),
            "Blue/Silver",
            "Mercury",
        ),
        _record(
            "NE",
            "Ishana",
            "ether",
            ("Divinity", "Purity", "Knowledge", "Spiritual growth"),
            ("Spiritual progress", "Clarity", "Divine grace", "Wisdom"),
            "White/Crystal",
            "Jupiter",
        ),
        _record(
            "E",
            "Indra",
            "fire",
            ("Power", "Status", "Growth", "Vitality"),
            ("Social status", "Recognition", "Career growth", "Health"),
            "Red/Orange",
            "Sun",
        ),
        _record(
            "SE",
            "Agni",
            "fire",
            ("Energy", "Transformation", "Digestion", "Metabolism"),
            ("Digestive health", "Energy levels", "Transformation", "Food"),
            "Red/Orange",
            "Venus",
        ),
        _record(
            "S",
            "Yama",
            "earth",
            ("Discipline", "Longevity", "Stability", "Law"),
            ("Life span", "Discipline", "Legal matters", "Stability"),
            "Brown/Black",
            "Mars",
        ),
        _record(
            "SW",
            "Nirriti",
            "earth",
            ("Foundation", "Ancestors", "Stability", "Protection"),
            ("Ancestral blessings", "Family stability", "Property", "Security"),
            "Yellow/Brown",
            "Rahu",
        ),
        _record(
            "W",
            "Varuna",
            "water",
            ("Emotions", "Profits", "Gains", "Fulfillment"),
            ("Profits", "Gains", "Emotional balance", "Returns"),
            "Blue/White",
            "Saturn",
        ),
        _record(
            "NW",
            "Vayu",
            "air",
            ("Movement", "Change", "Communication", "Travel"),
            ("Communication", "Travel", "Change", "Support"),
            "Grey/White",
            "Moon",
        ),
    ],
)

DOMINANCE_ANALYSIS = AnalysisRegistry.register(
    AnalysisDefinition(
        name="dominance",
        description="Area share of each direction against its ideal eighth",
        table=DOMINANCE_TABLE,
        rule_set=DOMINANCE_RULES,
        band=RadialBand.wide(),
    )
)

__all__ = [
    "DEFICIT_HARMFUL",
    "DEFICIT_WEAKENING",
    "DEVIATION_SCALE",
    "DEVIATION_TOLERANCE",
    "DOMINANCE_ANALYSIS",
    "DOMINANCE_RULES",
    "DOMINANCE_SCALE",
    "DOMINANCE_TABLE",
    "EXCESS_HARMFUL",
    "IDEAL_PERCENTAGE",
]
