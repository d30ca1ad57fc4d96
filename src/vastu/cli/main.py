"""Typer CLI for directional zone analysis."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from vastu.application import RunAnalysisCommand
from vastu.application.config import ConfigError, config_to_request, load_config
from vastu.cli.commands import validate_command
from vastu.domain.analyses import AnalysisRegistry
from vastu.domain.services.sectors import build_sectors
from vastu.infrastructure import JsonExporter, SectorTableFormatter, TextReportFormatter

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(
    name="vastu",
    help="Divide a plan boundary into compass sectors and score each direction.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. "
            f"Available formats: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)


def _emit(text: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(text)
        return
    try:
        output_file.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: Cannot write {output_file}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {output_file}")


@app.command()
def analyze(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    analysis: Annotated[
        list[str] | None,
        typer.Option(
            "--analysis",
            "-a",
            help="Analysis to run (repeatable); defaults to the configured analyses",
        ),
    ] = None,
    rotation: Annotated[
        float | None,
        typer.Option("--rotation", "-r", help="North rotation in degrees"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Analyze a plan boundary described by a configuration file.

    CLI options override config file values.

    Examples:
        vastu analyze plan.json
        vastu analyze plan.json --analysis loss --rotation 15
        vastu analyze plan.json --format json --output report.json
    """
    _configure_logging(verbose)
    _check_format(output_format)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    request = config_to_request(config)
    if analysis:
        request.analyses = list(analysis)
    if rotation is not None:
        request.north_rotation = rotation

    result = RunAnalysisCommand().execute(request)
    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        text = JsonExporter().export(result)
    else:
        text = TextReportFormatter().format(result)
    _emit(text, output_file)


@app.command()
def sectors(
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Number of sectors: 8, 16 or 32"),
    ] = 32,
    rotation: Annotated[
        float,
        typer.Option("--rotation", "-r", help="North rotation in degrees"),
    ] = 0.0,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
) -> None:
    """Show the sector partition for a sector count and north rotation."""
    _check_format(output_format)
    try:
        partition = build_sectors(count, rotation)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        data = [
            {
                "index": s.index,
                "start_angle": s.start_angle,
                "end_angle": s.end_angle,
                "center_angle": s.center_angle,
                "direction_label": s.direction_label,
                "direction_code": s.direction_code,
                "main_direction": s.main_direction.value,
            }
            for s in partition
        ]
        typer.echo(json.dumps(data, indent=2))
        return
    typer.echo(SectorTableFormatter().format(partition))


@app.command()
def analyses() -> None:
    """List the available analyses."""
    for name in AnalysisRegistry.available():
        definition = AnalysisRegistry.get(name)
        band = definition.band
        typer.echo(
            f"{name:<12} {definition.description} "
            f"(band {band.inner_ratio:g}-{band.outer_ratio:g})"
        )


if __name__ == "__main__":
    app()
