"""Unit tests for the bundled analyses.

These tests verify:
- The registry lists every bundled analysis
- Loss proneness from heaviness and blockage flags
- Prosperity and obstruction from coverage and declared usage
- Area dominance against the ideal eighth share
"""

import pytest

from vastu.domain.analyses import (
    DOMINANCE_ANALYSIS,
    LOSS_ANALYSIS,
    PROSPERITY_ANALYSIS,
    AnalysisDefinition,
    AnalysisRegistry,
)
from vastu.domain.services.coverage import RadialBand
from vastu.domain.services.scoring import DirectionFlags
from vastu.domain.value_objects import DirectionCoverage, MainDirection, Severity


def _coverage(areas: dict[str, float]) -> dict[MainDirection, DirectionCoverage]:
    """Full coverage with per-direction area contributions (default 1.0)."""
    return {
        d: DirectionCoverage(d, 100.0, areas.get(d.value, 1.0), (0,)) for d in MainDirection
    }


class TestAnalysisRegistry:
    """Tests for AnalysisRegistry."""

    def test_available(self) -> None:
        assert AnalysisRegistry.available() == ["dominance", "loss", "prosperity"]

    def test_get(self) -> None:
        assert AnalysisRegistry.get("loss") is LOSS_ANALYSIS
        assert AnalysisRegistry.is_registered("prosperity")

    def test_unknown(self) -> None:
        with pytest.raises(KeyError, match="Available analyses: dominance, loss, prosperity"):
            AnalysisRegistry.get("elements")

    def test_bands(self) -> None:
        assert LOSS_ANALYSIS.band == RadialBand()
        assert PROSPERITY_ANALYSIS.band == RadialBand()
        assert DOMINANCE_ANALYSIS.band == RadialBand.wide()

    def test_name_must_match_rule_set(self) -> None:
        with pytest.raises(ValueError, match="does not match"):
            AnalysisDefinition(
                name="other",
                description="",
                table=LOSS_ANALYSIS.table,
                rule_set=LOSS_ANALYSIS.rule_set,
            )


class TestLossAnalysis:
    """Tests for the loss-proneness analysis."""

    @pytest.fixture
    def report(self, full_coverage: dict, heavy_sw_ne: dict):
        return LOSS_ANALYSIS.run(full_coverage, heavy_sw_ne)

    def test_heavy_southwest_is_protective(self, report) -> None:
        southwest = report.assessment("SW")

        assert southwest.scores == {"loss": 0, "obstruction": 0, "decay": 0}
        assert southwest.severity == Severity.MINIMAL
        assert southwest.favorable
        assert southwest.labels["loss_prone"] == "no"

    def test_heavy_northeast_is_critical(self, report) -> None:
        northeast = report.assessment("NE")

        assert northeast.scores == {"loss": 90, "obstruction": 30, "decay": 60}
        assert northeast.severity == Severity.CRITICAL
        assert not northeast.favorable
        assert northeast.identifier == "Ishana"
        assert [f.code for f in northeast.findings] == [
            "heaviness_harmful",
            "northeast_urgent",
            "loss_critical",
            "remedial_actions",
        ]
        assert (
            "CRITICAL LOSS ZONE: Northeast (Ishana). Primary loss types: "
            "Spiritual degradation, Mental peace loss."
        ) in northeast.recommendations

    def test_light_south_needs_heaviness(self, report) -> None:
        south = report.assessment("S")

        assert south.scores == {"loss": 60, "obstruction": 10, "decay": 35}
        assert south.severity == Severity.HIGH
        assert south.labels["loss_prone"] == "yes"
        assert south.recommendations[0] == (
            "South lacks required heaviness. Add heavy structures to prevent health decline."
        )

    @pytest.mark.parametrize("direction", ["N", "E", "SE", "W", "NW"])
    def test_clear_directions(self, report, direction: str) -> None:
        assessment = report.assessment(direction)

        assert assessment.scores == {"loss": 0, "obstruction": 10, "decay": 5}
        assert assessment.favorable

    def test_overall(self, report) -> None:
        assert report.overall_scores == {"loss": 19, "obstruction": 11, "decay": 15}
        assert report.overall_severity == Severity.MINIMAL
        assert report.unfavorable_directions == [MainDirection.NE, MainDirection.S]

    def test_report_recommendations(self, report) -> None:
        assert report.recommendations == (
            "Overall Loss Risk: 19/100 | Obstruction Level: 11/100 | Decay Index: 15/100",
            "1 critical loss zone(s) need immediate remediation: Northeast.",
            "Heavy structures in Northeast causing losses. Lighten these areas.",
            (
                "CRITICAL: Northeast must be open, light and elevated. Its current state "
                "causes severe losses."
            ),
        )

    def test_blocked_directions(self, full_coverage: dict) -> None:
        report = LOSS_ANALYSIS.run(
            full_coverage,
            {
                "E": DirectionFlags(blocked=True),
                "S": DirectionFlags(heavy=True, blocked=True),
                "SW": DirectionFlags(heavy=True),
            },
        )

        assert report.assessment("E").scores == {"loss": 50, "obstruction": 50, "decay": 50}
        # Blockage is not harmful in the south
        assert report.assessment("S").scores["loss"] == 0
        assert report.assessment("S").scores["obstruction"] == 50

    def test_loss_independent_of_coverage(self, heavy_sw_ne: dict) -> None:
        sparse = {
            d: DirectionCoverage(d, 10.0, 0.1, (0,)) for d in MainDirection
        }

        report = LOSS_ANALYSIS.run(sparse, heavy_sw_ne)

        assert report.overall_scores["loss"] == 19


class TestProsperityAnalysis:
    """Tests for the prosperity analysis."""

    def test_unused_direction(self, full_coverage: dict) -> None:
        report = PROSPERITY_ANALYSIS.run(full_coverage)
        north = report.assessment("N")

        assert north.scores == {"prosperity": 70, "obstruction": 0, "harmony": 75}
        assert north.severity == Severity.GOOD
        assert north.labels["balance"] == "good"
        assert north.recommendations == (
            "Consider using North for: Treasury, Safe, Cash Counter.",
        )

    def test_ideal_usage(self, full_coverage: dict) -> None:
        report = PROSPERITY_ANALYSIS.run(full_coverage, {"SE": DirectionFlags(usage="Kitchen")})
        southeast = report.assessment("SE")

        assert southeast.scores == {"prosperity": 100, "obstruction": 0, "harmony": 100}
        assert southeast.severity == Severity.EXCELLENT
        assert southeast.labels["balance"] == "optimal"
        assert "Perfect alignment! Kitchen is ideal for Southeast ruled by Agni." in (
            southeast.recommendations
        )

    def test_prohibited_usage(self, full_coverage: dict) -> None:
        report = PROSPERITY_ANALYSIS.run(full_coverage, {"NE": DirectionFlags(usage="Kitchen")})
        northeast = report.assessment("NE")

        # A listed compatibility of 0 falls back to the default of 50
        assert northeast.scores["prosperity"] == 70
        assert northeast.scores["obstruction"] == 100
        assert northeast.labels["balance"] == "excessive"
        assert northeast.scores["harmony"] == 25
        assert northeast.recommendations == (
            "Kitchen in Northeast matches the prohibited use 'Kitchen'.",
            "Reduce heavy structures and use lighter elements in Northeast.",
            "CRITICAL: Current usage conflicts with Ishana's domain in Northeast. "
            "Consider relocation.",
        )

    def test_unknown_usage_uses_default_compatibility(self, full_coverage: dict) -> None:
        report = PROSPERITY_ANALYSIS.run(full_coverage, {"W": DirectionFlags(usage="Ballroom")})
        west = report.assessment("W")

        # 40 from coverage plus 50% of 60
        assert west.scores["prosperity"] == 70
        # (100 - 50) / 100 * 100
        assert west.scores["obstruction"] == 50

    def test_low_coverage_needs_improvement(self) -> None:
        sparse = {d: DirectionCoverage(d, 0.0, 0.0, (0,)) for d in MainDirection}

        report = PROSPERITY_ANALYSIS.run(sparse, {"N": DirectionFlags(usage="Bedroom")})
        north = report.assessment("N")

        assert north.scores["prosperity"] == 30
        assert north.severity == Severity.NEEDS_IMPROVEMENT
        assert north.labels["balance"] == "deficient"
        assert (
            "Install Mercury objects or symbols in North to honor Kubera. "
            "Use green/white colors and Water element representations."
        ) in north.recommendations

    def test_overall_summary(self, full_coverage: dict) -> None:
        report = PROSPERITY_ANALYSIS.run(full_coverage)

        assert report.overall_scores == {"prosperity": 70, "obstruction": 0, "harmony": 75}
        assert report.recommendations[0] == (
            "Overall Prosperity Level: 70/100 (good) | Obstruction: 0/100 | "
            "Mineral Harmony: 75/100"
        )
        assert report.recommendations[1].startswith("Blessed directions: North, Northeast")


class TestDominanceAnalysis:
    """Tests for the area dominance analysis."""

    def test_equal_shares_are_balanced(self, full_coverage: dict) -> None:
        report = DOMINANCE_ANALYSIS.run(full_coverage)

        for assessment in report.assessments.values():
            assert assessment.scores == {"dominance": 0, "imbalance": 0}
            assert assessment.severity == Severity.BALANCED
        assert report.assessment("N").recommendations == (
            "Maintain current balance in North (12.5%).",
        )
        assert report.recommendations == ("Overall Devta Imbalance: 0/100 | Mean Dominance: 0",)

    def test_excessive_north(self) -> None:
        report = DOMINANCE_ANALYSIS.run(_coverage({"N": 3.0}))
        north = report.assessment("N")

        # 30% share is 17.5 points above 12.5, scaled by 25
        assert north.scores == {"dominance": 70, "imbalance": 70}
        assert north.severity == Severity.HIGHLY_EXCESSIVE
        assert north.area_share == pytest.approx(30.0)
        assert north.recommendations == (
            "Excessive Kubera influence (30.0%) may over-emphasize income and cash flow "
            "in North.",
            "Reduce construction in North. Current 30.0% exceeds ideal 12.5%.",
        )

        south = report.assessment("S")
        assert south.scores == {"dominance": -10, "imbalance": 10}
        assert south.severity == Severity.BALANCED

        assert report.overall_scores == {"dominance": 0, "imbalance": 18}
        assert "Excessive dominance: North. Reduce construction in these areas." in (
            report.recommendations
        )

    def test_deficient_southwest(self) -> None:
        report = DOMINANCE_ANALYSIS.run(_coverage({"SW": 0.0}))
        southwest = report.assessment("SW")

        assert southwest.scores == {"dominance": -50, "imbalance": 50}
        assert southwest.severity == Severity.HIGHLY_DEFICIENT
        assert (
            "CRITICAL: Increase construction in Southwest. Current 0.0% below ideal 12.5%."
        ) in southwest.recommendations
        assert (
            "CRITICAL: Southwest is below its ideal share. Add heavy construction!"
        ) in report.recommendations

    def test_excessive_northeast_is_urgent(self) -> None:
        report = DOMINANCE_ANALYSIS.run(_coverage({"NE": 2.0}))
        northeast = report.assessment("NE")

        # 2/9 = 22.2% share
        assert northeast.scores["dominance"] == 39
        assert northeast.severity == Severity.EXCESSIVE
        assert (
            "URGENT: Remove heavy structures from Northeast. Keep it open and elevated."
        ) in northeast.recommendations
        assert (
            "CRITICAL: Northeast exceeds its ideal share. Remove heavy construction!"
        ) in report.recommendations

    def test_unmeasured_direction(self) -> None:
        coverage = _coverage({})
        coverage[MainDirection.W] = DirectionCoverage(MainDirection.W, None, 0.0)

        report = DOMINANCE_ANALYSIS.run(coverage)
        west = report.assessment("W")

        assert west.area_share is None
        assert west.scores == {"dominance": 0, "imbalance": 0}
        assert west.recommendations == ("Maintain current balance in West (n/a%).",)

    def test_ranks_single_excess(self) -> None:
        report = DOMINANCE_ANALYSIS.run(_coverage({"N": 3.0}))

        # every other direction sits at 10%, inside the five point tolerance
        assert len(report.imbalances) == 1
        north = report.imbalances[0]
        assert north.direction == MainDirection.N
        assert north.identifier == "Kubera"
        assert north.kind == "excessive"
        assert north.severity == Severity.CRITICAL
        assert north.area_share == pytest.approx(30.0)
        assert north.ideal == 12.5
        assert north.deviation == 17.5
        assert "1 Devta imbalance(s) detected (1 critical): North." in report.recommendations

    def test_southwest_deficit_is_always_critical(self) -> None:
        report = DOMINANCE_ANALYSIS.run(_coverage({"SW": 0.0}))

        # 12.5 points falls in the high tier; a southwest deficit outranks it
        assert [(i.direction, i.kind, i.severity) for i in report.imbalances] == [
            (MainDirection.SW, "deficient", Severity.CRITICAL),
        ]
        assert report.imbalances[0].deviation == -12.5

    def test_ranking_orders_by_severity(self) -> None:
        report = DOMINANCE_ANALYSIS.run(
            _coverage({"N": 2.5, "E": 0.5, "S": 0.5, "W": 0.5})
        )

        # N 31.25%, E/S/W 6.25%, the rest at the ideal
        assert [(i.direction.value, i.severity) for i in report.imbalances] == [
            ("N", Severity.CRITICAL),
            ("S", Severity.CRITICAL),
            ("E", Severity.LOW),
            ("W", Severity.LOW),
        ]
        assert "4 Devta imbalance(s) detected (2 critical): North, South, East, West." in (
            report.recommendations
        )

    @pytest.mark.parametrize(
        ("direction", "deviation", "severity"),
        [
            ("E", 15.0, Severity.CRITICAL),
            ("E", -10.0, Severity.HIGH),
            ("E", 7.0, Severity.MEDIUM),
            ("E", 6.9, Severity.LOW),
            ("NE", 5.1, Severity.CRITICAL),
            ("NE", -6.0, Severity.LOW),
            ("S", -5.1, Severity.CRITICAL),
            ("S", 8.0, Severity.MEDIUM),
            ("SW", -5.0, Severity.LOW),
        ],
    )
    def test_ranking_tiers(self, direction: str, deviation: float, severity: Severity) -> None:
        ranking = DOMINANCE_ANALYSIS.rule_set.ranking

        assert ranking.severity_for(MainDirection(direction), deviation) == severity

    def test_equal_shares_have_no_imbalances(self, full_coverage: dict) -> None:
        assert DOMINANCE_ANALYSIS.run(full_coverage).imbalances == ()

    def test_element_balance(self, full_coverage: dict) -> None:
        balance = DOMINANCE_ANALYSIS.run(full_coverage).element_balance

        assert list(balance) == ["water", "ether", "fire", "earth", "air"]
        assert balance == pytest.approx(
            {"water": 25.0, "ether": 12.5, "fire": 25.0, "earth": 25.0, "air": 12.5}
        )

    def test_element_balance_follows_shares(self) -> None:
        balance = DOMINANCE_ANALYSIS.run(_coverage({"N": 3.0})).element_balance

        # N and W are water: 30% + 10%
        assert balance["water"] == pytest.approx(40.0)
        assert balance["ether"] == pytest.approx(10.0)
        assert sum(balance.values()) == pytest.approx(100.0)

    def test_other_analyses_skip_summaries(self, full_coverage: dict) -> None:
        report = LOSS_ANALYSIS.run(full_coverage)

        assert report.imbalances == ()
        assert report.element_balance == {}
