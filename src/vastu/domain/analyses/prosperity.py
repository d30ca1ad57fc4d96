"""Prosperity and obstruction analysis (Devta Khanij).

Each direction is ruled by a deity with associated minerals and suited
room usages. Prosperity rewards coverage and compatible usage; obstruction
penalizes prohibited usage and compatibility shortfalls weighted by how much
of the direction is built.
"""

from __future__ import annotations

from vastu.domain.services.attributes import AttributeTable, DirectionalAttributeRecord
from vastu.domain.services.scoring import (
    Classification,
    ClassificationCase,
    CompatibilityDeficitRule,
    CompatibilityRule,
    CoverageRule,
    DirectionListFinding,
    FlagRule,
    IdealUsageRule,
    OverallFinding,
    ProhibitedUsageRule,
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

# Compatibility assumed for a declared usage missing from the record's table
DEFAULT_COMPATIBILITY = 50

PROSPERITY_SCALE = SeverityScale(
    name="prosperity",
    bands=(
        SeverityBand(Severity.EXCELLENT, 75, favorable=True),
        SeverityBand(Severity.GOOD, 60, favorable=True),
        SeverityBand(Severity.MODERATE, 40, favorable=False),
        SeverityBand(Severity.NEEDS_IMPROVEMENT, None, favorable=False),
    ),
)

PROSPERITY_TEMPLATES = {
    "prosperity_low": (
        "Install {minerals_first} objects or symbols in {direction} to honor {identifier}. "
        "Use {color} colors and {element} element representations."
    ),
    "usage_conflict": (
        "CRITICAL: Current usage conflicts with {identifier}'s domain in {direction}. "
        "Consider relocation."
    ),
    "usage_prohibited": "{usage} in {direction} matches the prohibited use '{keyword}'.",
    "usage_ideal": "Perfect alignment! {usage} is ideal for {direction} ruled by {identifier}.",
    "usage_suggestion": "Consider using {direction} for: {ideal_usage_hint}.",
    "balance_deficient": (
        "Place {minerals_first} or {minerals_second} objects to balance energy in {direction}."
    ),
    "balance_excessive": "Reduce heavy structures and use lighter elements in {direction}.",
    "balance_optimal": "Excellent balance! Maintain current arrangements in {direction}.",
    "summary": (
        "Overall Prosperity Level: {prosperity}/100 ({severity}) | "
        "Obstruction: {obstruction}/100 | Mineral Harmony: {harmony}/100"
    ),
    "blessed_directions": (
        "Blessed directions: {directions}. These sectors have strong support."
    ),
    "obstructed_directions": (
        "Obstructed directions: {directions}. Immediate remedial action needed."
    ),
    "high_obstruction": (
        "High obstruction detected. Install the prescribed minerals in the affected directions."
    ),
}

PROSPERITY_RULES = RuleSet(
    name="prosperity",
    title="Prosperity and Obstruction",
    sub_scores=(
        SubScoreDefinition(
            name="prosperity",
            rules=(
                CoverageRule(weight=40),
                CompatibilityRule(
                    weight=60,
                    default_compatibility=DEFAULT_COMPATIBILITY,
                    zero_as_missing=True,
                ),
                FlagRule(flag="has_usage", when=False, points=30, finding="usage_suggestion"),
                IdealUsageRule(),
            ),
        ),
        SubScoreDefinition(
            name="obstruction",
            rules=(
                ProhibitedUsageRule(points=80, coverage_weight=20),
                CompatibilityDeficitRule(
                    default_compatibility=DEFAULT_COMPATIBILITY,
                    zero_as_missing=True,
                ),
            ),
        ),
    ),
    primary="prosperity",
    scale=PROSPERITY_SCALE,
    classifications=(
        Classification(
            name="balance",
            cases=(
                ClassificationCase(
                    "optimal",
                    (
                        ScoreBound("prosperity", at_least=80),
                        ScoreBound("obstruction", at_most=20),
                    ),
                    finding="balance_optimal",
                    score=100,
                ),
                ClassificationCase(
                    "good",
                    (
                        ScoreBound("prosperity", at_least=60),
                        ScoreBound("obstruction", at_most=40),
                    ),
                    score=75,
                ),
                ClassificationCase(
                    "excessive",
                    (ScoreBound("obstruction", at_least=60),),
                    finding="balance_excessive",
                    score=25,
                ),
            ),
            default="deficient",
            default_finding="balance_deficient",
            default_score=40,
            score_name="harmony",
        ),
    ),
    score_findings=(
        ScoreFinding("prosperity_low", (ScoreBound("prosperity", at_most=49),)),
        ScoreFinding("usage_conflict", (ScoreBound("obstruction", at_least=61),)),
    ),
    report_findings=(
        OverallFinding("summary"),
        DirectionListFinding(
            "blessed_directions", bounds=(ScoreBound("prosperity", at_least=70),)
        ),
        DirectionListFinding(
            "obstructed_directions", bounds=(ScoreBound("obstruction", at_least=60),)
        ),
        OverallFinding("high_obstruction", (ScoreBound("obstruction", at_least=51),)),
    ),
    templates=PROSPERITY_TEMPLATES,
)

# =============================================================================
# Attribute Table
# =============================================================================


def _record(
    direction: str,
    deity: str,
    title: str,
    minerals: tuple[str, ...],
    element: str,
    color: str,
    ideal: tuple[str, ...],
    prohibited: tuple[str, ...],
    compatibility: dict[str, float],
) -> DirectionalAttributeRecord:
    return DirectionalAttributeRecord(
        direction=MainDirection(direction),
        identifier=deity,
        title=title,
        element=element,
        tags={"minerals": minerals},
        ideal_usage=ideal,
        prohibited_usage=prohibited,
        usage_compatibility=compatibility,
        guidance={"color": color.lower(), "minerals_second": minerals[1]},
    )


PROSPERITY_TABLE = AttributeTable(
    "prosperity",
    [
        _record(
            "N",
            "Kubera",
            "Lord of Wealth and Prosperity",
            ("Mercury", "Silver", "White Gold", "Pearl"),
            "Water",
            "Green/White",
            ("Treasury", "Safe", "Cash Counter", "Banking Area", "Accounts Office"),
            ("Toilet", "Septic Tank", "Garbage Area", "Heavy Storage", "Boiler Room"),
            {
                "Treasury": 100, "Safe": 100, "Cash Counter": 95, "Accounts": 90,
                "Office": 80, "Living Room": 60, "Bedroom": 50, "Kitchen": 30,
                "Toilet": 0, "Garbage": 0,
            },
        ),
        _record(
            "NE",
            "Ishana",
            "Supreme Lord Shiva",
            ("Crystal", "Quartz", "Diamond", "Clear Gemstones"),
            "Water + Air",
            "White/Light Blue",
            ("Puja Room", "Meditation Space", "Study Room", "Library"),
            ("Toilet", "Kitchen", "Septic Tank", "Heavy Storage", "Shoe Rack", "Garbage"),
            {
                "Puja Room": 100, "Meditation": 100, "Study": 90, "Library": 85,
                "Open Space": 80, "Living Room": 60, "Bedroom": 40, "Kitchen": 0,
                "Toilet": 0, "Storage": 10,
            },
        ),
        _record(
            "E",
            "Indra",
            "King of Gods and Heavens",
            ("Copper", "Bronze", "Brass", "Red Gemstones"),
            "Air",
            "Red/Orange",
            ("Living Room", "Hall", "Drawing Room", "Reception", "Main Entrance", "Balcony"),
            ("Toilet", "Store Room", "Dark Spaces", "Heavy Machinery"),
            {
                "Living Room": 100, "Hall": 95, "Reception": 90, "Entrance": 90,
                "Balcony": 85, "Bedroom": 60, "Office": 70, "Kitchen": 40,
                "Toilet": 20, "Storage": 30,
            },
        ),
        _record(
            "SE",
            "Agni",
            "Lord of Fire and Energy",
            ("Iron", "Red Oxide", "Magnetite", "Hematite", "Ruby"),
            "Fire",
            "Red/Orange",
            ("Kitchen", "Electrical Room", "Generator Room", "Boiler", "Fire Place"),
            ("Water Tank", "Well", "Bathroom", "Cold Storage"),
            {
                "Kitchen": 100, "Electrical": 95, "Generator": 90, "Boiler": 85,
                "Fire Place": 80, "Office": 50, "Living Room": 40, "Bathroom": 0,
                "Water Tank": 0,
            },
        ),
        _record(
            "S",
            "Yama",
            "Lord of Death and Dharma",
            ("Lead", "Black Stone", "Onyx", "Black Tourmaline"),
            "Fire + Earth",
            "Black/Dark Red",
            ("Master Bedroom", "Heavy Storage", "Strong Room", "Study", "Office"),
            ("Main Entrance", "Puja Room", "Children's Play Area", "Light Spaces"),
            {
                "Master Bedroom": 100, "Office": 90, "Study": 85, "Storage": 80,
                "Strong Room": 95, "Living Room": 50, "Kitchen": 40, "Entrance": 0,
                "Puja": 10,
            },
        ),
        _record(
            "SW",
            "Nirriti",
            "Goddess of Destruction and Chaos",
            ("Heavy Stone", "Granite", "Basalt", "Black Agate", "Smoky Quartz"),
            "Earth",
            "Brown/Black",
            ("Master Bedroom", "Heavy Storage", "Strong Walls", "Boundary Wall", "Safe"),
            ("Main Entrance", "Water Tank", "Toilet", "Kitchen", "Open Spaces"),
            {
                "Master Bedroom": 100, "Storage": 95, "Strong Room": 90, "Safe": 85,
                "Walls": 100, "Office": 60, "Living Room": 40, "Entrance": 0,
                "Kitchen": 20, "Toilet": 0,
            },
        ),
        _record(
            "W",
            "Varuna",
            "Lord of Water and Oceans",
            ("Tin", "White Metals", "Moonstone", "Pearl", "Aquamarine"),
            "Water",
            "Blue/White",
            ("Dining Room", "Children's Room", "Guest Room", "Storage", "Wardrobe"),
            ("Kitchen", "Fire Place", "Boiler", "Heavy Machinery"),
            {
                "Dining": 100, "Children Room": 90, "Guest Room": 85, "Storage": 80,
                "Wardrobe": 75, "Living Room": 60, "Office": 50, "Kitchen": 0,
                "Boiler": 0,
            },
        ),
        _record(
            "NW",
            "Vayu",
            "Lord of Wind and Air",
            ("Zinc", "Aluminum", "Light Metals", "White Sapphire"),
            "Air",
            "Gray/White",
            ("Guest Room", "Garage", "Vehicle Parking", "Store Room", "Servant Quarters"),
            ("Puja Room", "Master Bedroom", "Safe", "Treasury"),
            {
                "Guest Room": 100, "Garage": 95, "Parking": 90, "Store": 85,
                "Servant Quarters": 80, "Office": 50, "Living Room": 40, "Puja": 0,
                "Master Bedroom": 20,
            },
        ),
    ],
)

PROSPERITY_ANALYSIS = AnalysisRegistry.register(
    AnalysisDefinition(
        name="prosperity",
        description="Prosperity and obstruction from coverage and declared room usage",
        table=PROSPERITY_TABLE,
        rule_set=PROSPERITY_RULES,
    )
)

__all__ = [
    "DEFAULT_COMPATIBILITY",
    "PROSPERITY_ANALYSIS",
    "PROSPERITY_RULES",
    "PROSPERITY_SCALE",
    "PROSPERITY_TABLE",
]
