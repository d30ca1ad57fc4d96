"""Loss-proneness analysis (Devta Nighath).

Each direction is prone to a kind of loss when its physical condition
works against the ruling deity: heaviness protects the south and southwest
but harms the north, northeast, east and northwest, and blockage harms
every direction except the south and southwest. The northeast is the most
sensitive direction and carries heavier penalties.
"""

from __future__ import annotations

from vastu.domain.services.attributes import AttributeTable, DirectionalAttributeRecord
from vastu.domain.services.scoring import (
    Classification,
    ClassificationCase,
    DerivedScore,
    DirectionListFinding,
    DirectionSet,
    FlagRule,
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

HEAVINESS_BENEFICIAL = DirectionSet.of("S", "SW")
HEAVINESS_HARMFUL = DirectionSet.of("N", "NE", "E", "NW")
BLOCKAGE_HARMFUL = DirectionSet.all_except("S", "SW")

LOSS_SCALE = SeverityScale(
    name="loss",
    bands=(
        SeverityBand(Severity.CRITICAL, 80, favorable=False),
        SeverityBand(Severity.HIGH, 60, favorable=False),
        SeverityBand(Severity.MEDIUM, 40, favorable=False),
        SeverityBand(Severity.LOW, 20, favorable=True),
        SeverityBand(Severity.MINIMAL, None, favorable=True),
    ),
)

LOSS_PRONE_THRESHOLD = 40

LOSS_TEMPLATES = {
    "heaviness_missing": (
        "{direction} lacks required heaviness. Add heavy structures to prevent "
        "{primary_loss}."
    ),
    "heaviness_harmful": "Heavy structures in {direction} causing losses. Lighten this area.",
    "blockage_harmful": (
        "Remove blockages from {direction} to restore flow and prevent {obstruction_type}."
    ),
    "northeast_urgent": (
        "URGENT: Northeast must be open and light. Remove all heavy structures "
        "and blockages from it."
    ),
    "loss_critical": (
        "CRITICAL LOSS ZONE: {direction} ({identifier}). Primary loss types: {loss_types}."
    ),
    "remedial_actions": "Remedial actions for {direction}: {remedial_actions}",
    "summary": (
        "Overall Loss Risk: {loss}/100 | Obstruction Level: {obstruction}/100 | "
        "Decay Index: {decay}/100"
    ),
    "critical_zones": "{count} critical loss zone(s) need immediate remediation: {directions}.",
    "harmful_heavy_zones": "Heavy structures in {directions} causing losses. Lighten these areas.",
    "northeast_obstructed": (
        "CRITICAL: Northeast must be open, light and elevated. Its current state "
        "causes severe losses."
    ),
    "southwest_light": (
        "HIGH: Southwest must be heavy and strong. Its current lightness causes "
        "instability and losses."
    ),
    "high_overall_risk": (
        "High overall loss risk. Corrections are needed across multiple directions."
    ),
}

LOSS_RULES = RuleSet(
    name="loss",
    title="Loss Proneness",
    sub_scores=(
        SubScoreDefinition(
            name="loss",
            rules=(
                FlagRule(
                    flag="heavy",
                    when=False,
                    directions=HEAVINESS_BENEFICIAL,
                    points=60,
                    finding="heaviness_missing",
                ),
                FlagRule(
                    flag="heavy",
                    directions=HEAVINESS_HARMFUL,
                    points=60,
                    overrides={MainDirection.NE: 90},
                    finding="heaviness_harmful",
                ),
                FlagRule(
                    flag="blocked",
                    directions=BLOCKAGE_HARMFUL,
                    points=50,
                    overrides={MainDirection.NE: 80},
                    finding="blockage_harmful",
                ),
                FlagRule(
                    flag="clear",
                    when=False,
                    directions=DirectionSet.of("NE"),
                    points=0,
                    finding="northeast_urgent",
                ),
            ),
        ),
        SubScoreDefinition(
            name="obstruction",
            rules=(
                FlagRule(flag="clear", points=10),
                FlagRule(flag="blocked", points=50),
                FlagRule(flag="heavy", directions=BLOCKAGE_HARMFUL, points=30),
            ),
        ),
    ),
    derived=(DerivedScore(name="decay", sources=("loss", "obstruction")),),
    primary="loss",
    scale=LOSS_SCALE,
    classifications=(
        Classification(
            name="loss_prone",
            cases=(
                ClassificationCase(
                    "yes", (ScoreBound("loss", at_least=LOSS_PRONE_THRESHOLD),)
                ),
            ),
            default="no",
        ),
    ),
    score_findings=(
        ScoreFinding("loss_critical", (ScoreBound("loss", at_least=80),)),
        ScoreFinding("remedial_actions", (ScoreBound("loss", at_least=60),)),
    ),
    report_findings=(
        OverallFinding("summary"),
        DirectionListFinding("critical_zones", severities=frozenset({Severity.CRITICAL})),
        DirectionListFinding(
            "harmful_heavy_zones",
            directions=BLOCKAGE_HARMFUL,
            flag="heavy",
            bounds=(ScoreBound("loss", at_least=41),),
        ),
        DirectionListFinding(
            "northeast_obstructed",
            directions=DirectionSet.of("NE"),
            flag="clear",
            flag_value=False,
        ),
        DirectionListFinding(
            "southwest_light",
            directions=DirectionSet.of("SW"),
            flag="heavy",
            flag_value=False,
        ),
        OverallFinding("high_overall_risk", (ScoreBound("loss", at_least=60),)),
    ),
    templates=LOSS_TEMPLATES,
)

# =============================================================================
# Attribute Table
# =============================================================================


def _record(
    direction: str,
    deity: str,
    title: str,
    loss_types: tuple[str, ...],
    obstruction_type: str,
    remedial_actions: tuple[str, ...],
) -> DirectionalAttributeRecord:
    return DirectionalAttributeRecord(
        direction=MainDirection(direction),
        identifier=deity,
        title=title,
        tags={"losses": loss_types, "remedies": remedial_actions},
        guidance={
            "primary_loss": loss_types[0].lower(),
            "loss_types": ", ".join(loss_types[:2]),
            "obstruction_type": obstruction_type.lower(),
            "remedial_actions": " ".join(f"{a}." for a in remedial_actions[:2]),
        },
    )


LOSS_TABLE = AttributeTable(
    "loss",
    [
        _record(
            "N",
            "Kubera",
            "Lord of Wealth",
            ("Financial losses", "Wealth depletion", "Income blockage", "Savings loss"),
            "Wealth obstruction",
            ("Remove heavy structures from North", "Keep North open and light"),
        ),
        _record(
            "NE",
            "Ishana",
            "Supreme Divine Lord",
            ("Spiritual degradation", "Mental peace loss", "Divine grace loss"),
            "Spiritual blockage",
            ("Remove all heavy structures from Northeast", "Keep it extremely clean"),
        ),
        _record(
            "E",
            "Indra",
            "King of Gods",
            ("Social status loss", "Reputation damage", "Relationship losses"),
            "Social obstruction",
            ("Keep East open and bright", "Ensure morning sunlight entry"),
        ),
        _record(
            "SE",
            "Agni",
            "Lord of Fire",
            ("Health deterioration", "Energy loss", "Digestive issues"),
            "Energy blockage",
            ("Keep the fire element active", "Remove water features from Southeast"),
        ),
        _record(
            "S",
            "Yama",
            "Lord of Dharma",
            ("Health decline", "Longevity reduction", "Legal troubles"),
            "Life force obstruction",
            ("Build heavy walls in South", "Place heavy furniture and storage"),
        ),
        _record(
            "SW",
            "Nirriti",
            "Goddess of Destruction",
            ("Relationship breakdown", "Property loss", "Instability"),
            "Stability obstruction",
            ("Build the heaviest structures in Southwest", "Strengthen walls and foundation"),
        ),
        _record(
            "W",
            "Varuna",
            "Lord of Water",
            ("Profit loss", "Gains reduction", "Emotional instability"),
            "Gains obstruction",
            ("Maintain moderate structure in West", "Ensure proper air circulation"),
        ),
        _record(
            "NW",
            "Vayu",
            "Lord of Wind",
            ("Communication breakdown", "Support loss", "Partnership issues"),
            "Movement obstruction",
            ("Keep Northwest light and open", "Allow air circulation"),
        ),
    ],
)

LOSS_ANALYSIS = AnalysisRegistry.register(
    AnalysisDefinition(
        name="loss",
        description="Loss proneness from heaviness and blockage per direction",
        table=LOSS_TABLE,
        rule_set=LOSS_RULES,
    )
)

__all__ = [
    "BLOCKAGE_HARMFUL",
    "HEAVINESS_BENEFICIAL",
    "HEAVINESS_HARMFUL",
    "LOSS_ANALYSIS",
    "LOSS_PRONE_THRESHOLD",
    "LOSS_RULES",
    "LOSS_SCALE",
    "LOSS_TABLE",
]
