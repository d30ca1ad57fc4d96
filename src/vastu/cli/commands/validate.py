"""Validate command for checking plan configuration files.

Problems are grouped by the part of the plan they concern (boundary,
coverage settings, directions) so each group can be fixed in one place. A
usable configuration also gets a preview of the analyses it would run and
the radial band each one measures.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

import typer

from vastu.application.config import (
    AnalysisConfiguration,
    ConfigError,
    ValidationResult,
    config_to_request,
    load_config,
    validate_config,
)

# Section title and the top-level config keys it collects
SECTIONS: tuple[tuple[str, frozenset[str]], ...] = (
    (
        "Boundary",
        frozenset({"boundary", "center_mode", "radius", "north_rotation", "granularity"}),
    ),
    ("Coverage", frozenset({"coverage"})),
    ("Directions", frozenset({"directions", "analyses"})),
)
OTHER_SECTION = "Configuration"


def section_for(path: str) -> str:
    """Section title for a JSON path such as ``boundary[2].x``."""
    root = path.split(".", 1)[0].split("[", 1)[0]
    for title, roots in SECTIONS:
        if root in roots:
            return title
    return OTHER_SECTION


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a plan configuration file.

    Reports, per section of the plan:
    - Boundary: too few points, degenerate shape, center outside the outline
    - Coverage: band overrides an analysis cannot use, noisy sample counts
    - Directions: nothing flagged, usages no selected analysis reads

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        vastu validate plan.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _show_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _show_sections(result)
    if result.is_valid:
        _show_plan(config)
    _show_verdict(result)
    raise typer.Exit(code=result.exit_code)


def _show_load_error(error: ConfigError) -> None:
    if error.error_type == "file_not_found":
        typer.echo(f"File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"  line {detail.get('line', '?')}, column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}",
                err=True,
            )
    elif error.error_type == "validation":
        grouped: dict[str, list[str]] = {}
        for detail in error.details:
            path = detail.get("path", "unknown")
            line = f"  error   {path}: {detail.get('message', 'Unknown error')}"
            if detail.get("value") is not None:
                line += f" (got {detail['value']!r})"
            grouped.setdefault(section_for(path), []).append(line)
        _echo_grouped(grouped, err=True)
    else:
        typer.echo(error.message, err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _show_sections(result: ValidationResult) -> None:
    errors: dict[str, list[str]] = {}
    for error in result.errors:
        lines = errors.setdefault(section_for(error.path), [])
        lines.append(f"  error   {error.path}: {error.message}")
        if error.reason is not None:
            lines.append(f"          reason: {error.reason}")
        if error.value is not None:
            lines.append(f"          value: {error.value!r}")

    warnings: dict[str, list[str]] = {}
    for warning in result.warnings:
        lines = warnings.setdefault(section_for(warning.path), [])
        lines.append(f"  warning {warning.path}: {warning.message}")
        if warning.suggestion:
            lines.append(f"          try: {warning.suggestion}")

    _echo_grouped(errors, err=True)
    _echo_grouped(warnings, err=False)


def _echo_grouped(grouped: dict[str, list[str]], err: bool) -> None:
    for title in _ordered(grouped):
        typer.echo(f"{title}:", err=err)
        for line in grouped[title]:
            typer.echo(line, err=err)
        typer.echo(err=err)


def _ordered(titles: Iterable[str]) -> list[str]:
    order = [title for title, _ in SECTIONS] + [OTHER_SECTION]
    return sorted(titles, key=order.index)


def _show_plan(config: AnalysisConfiguration) -> None:
    request = config_to_request(config)
    typer.echo(
        f"Plan: {len(request.boundary)} boundary points, {request.granularity} sectors, "
        f"north at {request.north_rotation:g} degrees"
    )
    for definition in request.selected_analyses():
        band = request.resolve_band(definition.band)
        typer.echo(
            f"  {definition.name:<12} band {band.inner_ratio:g}-{band.outer_ratio:g} "
            f"of the radius"
        )
    typer.echo()


def _show_verdict(result: ValidationResult) -> None:
    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


__all__ = ["SECTIONS", "section_for", "validate_command"]
