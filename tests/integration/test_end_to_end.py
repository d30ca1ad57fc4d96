"""End-to-end tests from configuration data to scored reports.

These tests drive the full pipeline: configuration loading, request
conversion, circle construction, coverage measurement and scoring.
"""

from typing import Any

import pytest

from vastu.application import AnalysisOutput, RunAnalysisCommand
from vastu.application.config import (
    config_to_request,
    load_config_from_dict,
    validate_config,
)
from vastu.domain.value_objects import MainDirection, Severity
from vastu.infrastructure import JsonExporter

SQUARE = [[0, 0], [100, 0], [100, 100], [0, 100]]
L_SHAPE = [[0, 0], [100, 0], [100, 50], [50, 50], [50, 100], [0, 100]]


def _run(**data: Any) -> AnalysisOutput:
    config = load_config_from_dict({"schema_version": "1.0", **data})
    return RunAnalysisCommand().execute(config_to_request(config))


class TestSquarePlan:
    """A fully covered square with heavy southwest and northeast."""

    @pytest.fixture
    def output(self) -> AnalysisOutput:
        return _run(
            boundary=SQUARE,
            coverage={"method": "exact"},
            directions={"SW": {"heavy": True}, "NE": {"heavy": True}},
            analyses=["loss"],
        )

    def test_circle(self, output: AnalysisOutput) -> None:
        assert output.is_valid
        assert output.circle.center.x == 50
        assert output.circle.center.y == 50
        assert output.circle.radius == 50
        assert output.circle.count == 32

    def test_loss_report(self, output: AnalysisOutput) -> None:
        report = output.reports["loss"]

        assert report.overall_scores == {"loss": 19, "obstruction": 11, "decay": 15}
        assert report.assessment("NE").severity == Severity.CRITICAL
        assert report.assessment("SW").favorable
        assert report.unfavorable_directions == [MainDirection.NE, MainDirection.S]

    def test_full_coverage(self, output: AnalysisOutput) -> None:
        for coverage in output.direction_coverage["loss"].values():
            assert coverage.coverage_percent == pytest.approx(100.0)
            assert coverage.has_coverage
        for coverage in output.sector_coverage.values():
            assert coverage.is_fully_covered


class TestMonteCarloPlan:
    """Seeded sampling is repeatable."""

    def test_seeded_runs_repeat(self) -> None:
        data = {
            "boundary": L_SHAPE,
            "coverage": {"samples_per_sector": 40, "seed": 11},
            "analyses": ["dominance"],
        }

        first = JsonExporter().to_dict(_run(**data))
        second = JsonExporter().to_dict(_run(**data))

        assert first == second


class TestRotatedPlan:
    """Rotation moves sectors without changing a symmetric result."""

    def test_rotated_square_is_balanced(self) -> None:
        output = _run(
            boundary=SQUARE,
            north_rotation=30,
            coverage={"method": "exact"},
            analyses=["dominance"],
        )

        report = output.reports["dominance"]
        assert output.circle.sectors[0].start_angle == 30
        for assessment in report.assessments.values():
            assert assessment.scores["dominance"] == 0
            assert assessment.severity == Severity.BALANCED


class TestConcavePlan:
    """An L-shaped plan missing its south-east quadrant."""

    @pytest.fixture
    def output(self) -> AnalysisOutput:
        return _run(
            boundary=L_SHAPE,
            center_mode="centroid",
            coverage={"method": "exact"},
            analyses=["dominance"],
        )

    def test_centroid_center(self, output: AnalysisOutput) -> None:
        assert output.circle.center.x == pytest.approx(125 / 3)
        assert output.circle.center.y == pytest.approx(125 / 3)

    def test_missing_corner_is_deficient(self, output: AnalysisOutput) -> None:
        coverage = output.direction_coverage["dominance"]
        report = output.reports["dominance"]

        assert coverage[MainDirection.SE].coverage_percent < coverage[MainDirection.N].coverage_percent
        assert report.assessment("SE").scores["dominance"] < 0


class TestBandOverrides:
    """Band overrides that validate also run."""

    def test_narrow_band_for_dominance_only(self) -> None:
        data = {
            "schema_version": "1.0",
            "boundary": SQUARE,
            "coverage": {"outer_ratio": 0.25, "seed": 1},
            "directions": {"SW": {"heavy": True}},
            "analyses": ["dominance"],
        }
        config = load_config_from_dict(data)

        assert validate_config(config).errors == []
        output = RunAnalysisCommand().execute(config_to_request(config))

        assert output.is_valid
        assert len(output.sector_coverage) == 32
        assert output.reports["dominance"].overall_scores["imbalance"] == 0
