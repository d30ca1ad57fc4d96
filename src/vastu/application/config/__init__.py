"""Configuration schema and loading system for directional analyses.

This package provides JSON-based configuration loading and validation. It
includes Pydantic models for schema validation, a loader with comprehensive
error handling, adapters into domain objects and advisory checks.

Public API:
    - AnalysisConfiguration: Root configuration model
    - PointConfig: Boundary vertex model
    - CoverageConfig: Coverage estimation settings
    - DirectionFlagsConfig: Per-direction situational flags
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation

Example:
    >>> from pathlib import Path
    >>> from vastu.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("plan.json"))
    ...     print(f"{len(config.boundary)} boundary points")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from vastu.application.config.adapter import (
    config_to_analyses,
    config_to_boundary,
    config_to_flags,
    config_to_request,
)
from vastu.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from vastu.application.config.schema import (
    SUPPORTED_VERSIONS,
    AnalysisConfiguration,
    CoverageConfig,
    DirectionFlagsConfig,
    PointConfig,
)
from vastu.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "AnalysisConfiguration",
    "CoverageConfig",
    "DirectionFlagsConfig",
    "PointConfig",
    "SUPPORTED_VERSIONS",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Adapters
    "config_to_analyses",
    "config_to_boundary",
    "config_to_flags",
    "config_to_request",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
]
