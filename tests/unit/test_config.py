"""Unit tests for configuration schema, loader, adapter and validator.

These tests verify:
- Valid configurations are loaded correctly
- Unknown fields and unsupported versions are rejected
- Loader error handling (file not found, JSON parse errors)
- Conversion into AnalysisRequest and domain flags
- Advisory checks produce the expected errors and warnings
"""

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from vastu.application.config import (
    SUPPORTED_VERSIONS,
    AnalysisConfiguration,
    ConfigError,
    CoverageConfig,
    PointConfig,
    config_to_analyses,
    config_to_flags,
    config_to_request,
    load_config,
    load_config_from_dict,
    validate_config,
)
from vastu.application.config.loader import _format_json_path
from vastu.domain.services.scoring import DirectionFlags
from vastu.domain.services.sectors import CenterMode
from vastu.domain.value_objects import MainDirection, Point2D

# Get path to test fixtures
FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"

SQUARE = [[0, 0], [100, 0], [100, 100], [0, 100]]


def _config(**overrides: Any) -> AnalysisConfiguration:
    data: dict[str, Any] = {"schema_version": "1.0", "boundary": SQUARE}
    data.update(overrides)
    return load_config_from_dict(data)


class TestPointConfig:
    """Tests for PointConfig model."""

    def test_object_form(self) -> None:
        assert PointConfig.model_validate({"x": 1, "y": 2}) == PointConfig(x=1, y=2)

    def test_pair_form(self) -> None:
        assert PointConfig.model_validate([3.5, 4]) == PointConfig(x=3.5, y=4)

    def test_wrong_pair_length(self) -> None:
        with pytest.raises(PydanticValidationError):
            PointConfig.model_validate([1, 2, 3])

    def test_rejects_infinity(self) -> None:
        with pytest.raises(PydanticValidationError):
            PointConfig(x=float("inf"), y=0)


class TestCoverageConfig:
    """Tests for CoverageConfig model."""

    def test_defaults(self) -> None:
        config = CoverageConfig()

        assert config.method == "monte_carlo"
        assert config.samples_per_sector == 200
        assert config.seed is None
        assert config.inner_ratio is None
        assert config.arc_resolution == 16

    def test_inner_must_be_below_outer(self) -> None:
        with pytest.raises(PydanticValidationError, match="inner_ratio"):
            CoverageConfig(inner_ratio=0.6, outer_ratio=0.5)

    def test_unknown_method(self) -> None:
        with pytest.raises(PydanticValidationError):
            CoverageConfig(method="grid")


class TestAnalysisConfiguration:
    """Tests for the root configuration model."""

    def test_minimal(self) -> None:
        config = _config()

        assert config.schema_version == "1.0"
        assert len(config.boundary) == 4
        assert config.granularity == 32
        assert config.center_mode == CenterMode.BOUNDING_BOX
        assert config.directions == {}
        assert config.analyses == []

    def test_supported_versions(self) -> None:
        assert "1.0" in SUPPORTED_VERSIONS

    def test_newer_minor_version_accepted(self) -> None:
        assert _config(schema_version="1.3").schema_version == "1.3"

    def test_unsupported_major_version(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(schema_version="2.0")

        assert exc_info.value.error_type == "validation"
        assert "Unsupported schema version" in str(exc_info.value)

    def test_bad_version_format(self) -> None:
        with pytest.raises(ConfigError):
            _config(schema_version="one")

    def test_too_few_points(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(boundary=[[0, 0], [1, 1]])

        assert exc_info.value.details[0]["path"] == "boundary"

    def test_unsupported_granularity(self) -> None:
        with pytest.raises(ConfigError):
            _config(granularity=12)

    def test_direction_codes(self) -> None:
        config = _config(directions={"NE": {"heavy": True}})

        assert config.directions[MainDirection.NE].heavy

    def test_unknown_direction_code(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(directions={"UP": {"heavy": True}})

        assert exc_info.value.details[0]["path"].startswith("directions")

    def test_unknown_analysis(self) -> None:
        with pytest.raises(ConfigError, match="Unknown analyses"):
            _config(analyses=["elements"])

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(colour="red")

        assert exc_info.value.details[0]["path"] == "colour"

    def test_nested_error_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(boundary=[[0, 0], [100, 0], {"x": 1, "z": 2}])

        paths = [detail["path"] for detail in exc_info.value.details]
        assert any(path.startswith("boundary[2]") for path in paths)


class TestFormatJsonPath:
    """Tests for _format_json_path."""

    def test_nested(self) -> None:
        assert _format_json_path(("boundary", 2, "x")) == "boundary[2].x"
        assert _format_json_path(("coverage", "seed")) == "coverage.seed"
        assert _format_json_path((0,)) == "[0]"


class TestLoadConfig:
    """Tests for load_config."""

    def test_valid_file(self) -> None:
        config = load_config(FIXTURES_PATH / "valid_full.json")

        assert config.name == "Square plot"
        assert config.granularity == 16
        assert config.coverage.method == "exact"

    def test_file_not_found(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "nonexistent.json")

        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == FIXTURES_PATH / "nonexistent.json"

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "invalid_json.json")

        assert exc_info.value.error_type == "json_parse"
        assert "line" in exc_info.value.details[0]
        assert "line" in str(exc_info.value)

    def test_validation_error(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "unknown_field.json")

        assert exc_info.value.error_type == "validation"
        assert isinstance(exc_info.value.__cause__, PydanticValidationError)

    def test_tmp_file(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.json"
        path.write_text('{"schema_version": "1.0", "boundary": [[0,0],[4,0],[4,4]]}')

        assert len(load_config(path).boundary) == 3


class TestAdapter:
    """Tests for configuration adapter functions."""

    def test_config_to_flags_fills_all_directions(self) -> None:
        flags = config_to_flags(
            _config(directions={"SE": {"usage": "Kitchen"}, "SW": {"heavy": True}})
        )

        assert len(flags) == 8
        assert flags[MainDirection.SE] == DirectionFlags(usage="Kitchen")
        assert flags[MainDirection.SW].heavy
        assert flags[MainDirection.N] == DirectionFlags()

    def test_config_to_request(self) -> None:
        config = _config(
            north_rotation=15,
            granularity=8,
            center_mode="centroid",
            radius=40,
            coverage={"method": "exact", "arc_resolution": 8, "inner_ratio": 0.1},
            analyses=["loss"],
        )

        request = config_to_request(config)

        assert request.boundary[1] == Point2D(100, 0)
        assert request.north_rotation == 15
        assert request.granularity == 8
        assert request.center_mode == "centroid"
        assert request.radius == 40
        assert request.method == "exact"
        assert request.arc_resolution == 8
        assert request.inner_ratio == 0.1
        assert request.outer_ratio is None
        assert request.analyses == ["loss"]
        assert request.validate() == []

    def test_empty_analyses_selects_all(self) -> None:
        names = [definition.name for definition in config_to_analyses(_config())]

        assert names == ["dominance", "loss", "prosperity"]

    def test_repeated_analyses_run_once(self) -> None:
        names = [d.name for d in config_to_analyses(_config(analyses=["loss", "dominance", "loss"]))]

        assert names == ["loss", "dominance"]


class TestValidateConfig:
    """Tests for validate_config advisories."""

    def test_clean_config(self) -> None:
        result = validate_config(load_config(FIXTURES_PATH / "valid_full.json"))

        assert result.is_valid
        assert not result.has_warnings
        assert result.exit_code == 0

    def test_no_flags_warns(self) -> None:
        result = validate_config(_config())

        assert result.is_valid
        assert result.exit_code == 2
        assert [w.path for w in result.warnings] == ["directions"]

    def test_degenerate_boundary(self) -> None:
        result = validate_config(load_config(FIXTURES_PATH / "degenerate_boundary.json"))

        assert not result.is_valid
        assert result.exit_code == 1
        assert result.errors[0].path == "boundary"
        assert result.errors[0].reason == "invalid_radius"
        assert result.errors[0].value is None

    def test_center_outside_boundary(self) -> None:
        result = validate_config(load_config(FIXTURES_PATH / "concave_plot.json"))

        assert result.is_valid
        warning = next(w for w in result.warnings if w.path == "center_mode")
        assert "outside the boundary" in warning.message
        assert "10.0 units away" in warning.message

    def test_few_samples_warns(self) -> None:
        result = validate_config(
            _config(coverage={"samples_per_sector": 5}, directions={"SW": {"heavy": True}})
        )

        assert [w.path for w in result.warnings] == ["coverage.samples_per_sector"]

    def test_seed_ignored_by_exact(self) -> None:
        result = validate_config(
            _config(coverage={"method": "exact", "seed": 1}, directions={"SW": {"heavy": True}})
        )

        assert [w.path for w in result.warnings] == ["coverage.seed"]

    def test_band_override_conflicts_with_analysis(self) -> None:
        result = validate_config(
            _config(coverage={"outer_ratio": 0.25}, directions={"SW": {"heavy": True}})
        )

        assert not result.is_valid
        messages = [e.message for e in result.errors if e.path == "coverage"]
        assert any("'loss'" in message for message in messages)
        assert not any("'dominance'" in message for message in messages)

    def test_usage_ignored_without_prosperity(self) -> None:
        result = validate_config(
            _config(directions={"SE": {"usage": "Kitchen"}}, analyses=["loss"])
        )

        assert [w.path for w in result.warnings] == ["directions.SE.usage"]

    def test_duplicate_analyses_warn(self) -> None:
        result = validate_config(
            _config(directions={"SW": {"heavy": True}}, analyses=["loss", "loss"])
        )

        assert [w.path for w in result.warnings] == ["analyses"]
