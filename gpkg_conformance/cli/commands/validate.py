"""Validate command - run the conformance catalog against one GeoPackage.

This module is a thin adapter between Click and the test run orchestrator:
1. Resolve the container and inclusion set from arguments or run properties
2. Open the container read-only and run a fresh orchestrator
3. Present the verdicts and write the requested reports
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from ...application.models import TestRunRequest
from ...config import ConfigLoader
from ...constants import Defaults
from ...domain.catalog import get_catalog
from ...domain.services.class_selector import parse_inclusion_set
from ...exceptions import ContainerError, RunPropertiesError
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.run_properties import load_run_properties
from ..presenters.summary import SummaryPresenter

console = Console()


@dataclass(frozen=True)
class ValidateCommandOptions:
    ics: tuple[str, ...]
    props_file: Path | None
    config_file: Path | None
    json_path: Path | None
    xml_path: Path | None
    write_reports: bool
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> ValidateCommandOptions:
        return cls(
            ics=cast("tuple[str, ...]", options.get("ics") or ()),
            props_file=cast("Path | None", options.get("props_file")),
            config_file=cast("Path | None", options.get("config_file")),
            json_path=cast("Path | None", options.get("json_path")),
            xml_path=cast("Path | None", options.get("xml_path")),
            write_reports=bool(options.get("write_reports")),
            verbose=cast("int", options.get("verbose") or 0),
        )


def resolve_request(
    container_path: Path | None, options: ValidateCommandOptions
) -> TestRunRequest:
    """Combine command-line arguments with an optional run properties file.

    Explicit arguments win over the properties file. Without any inclusion
    set every catalog class is enabled.
    """
    from_props: TestRunRequest | None = None
    if options.props_file is not None:
        try:
            from_props = load_run_properties(options.props_file)
        except RunPropertiesError as e:
            raise click.ClickException(str(e)) from e

    path = container_path or (from_props.container_path if from_props else None)
    if path is None:
        raise click.UsageError("Provide a CONTAINER argument or a --props file")

    inclusion_set = parse_inclusion_set(",".join(options.ics)) if options.ics else None
    if inclusion_set is None and from_props is not None:
        inclusion_set = from_props.inclusion_set
    if inclusion_set is None:
        inclusion_set = frozenset(c.name for c in get_catalog())
    return TestRunRequest(container_path=path, inclusion_set=inclusion_set)


def resolve_report_paths(
    options: ValidateCommandOptions, report_dir: Path
) -> tuple[Path | None, Path | None]:
    """Explicit --json/--xml paths win; --reports fills the rest from report_dir."""
    if not options.write_reports:
        return options.json_path, options.xml_path
    return (
        options.json_path or report_dir / Defaults.REPORT_JSON,
        options.xml_path or report_dir / Defaults.REPORT_XML,
    )


@click.command()
@click.argument(
    "container_path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--ics",
    "ics",
    multiple=True,
    help="Conformance class to enable (repeatable or comma separated; default: all)",
)
@click.option(
    "--props",
    "props_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Run properties XML supplying 'iut' and 'ics' entries",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a gpkg_conformance.toml config file (default: ./gpkg_conformance.toml)",
)
@click.option(
    "--json",
    "json_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a machine-readable JSON report to this path",
)
@click.option(
    "--xml",
    "xml_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a TestNG-style XML report to this path",
)
@click.option(
    "--reports",
    "write_reports",
    is_flag=True,
    help="Write both reports into the configured report directory",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def validate_command(container_path: Path | None, **options: object) -> None:
    """Validate a GeoPackage container against the conformance catalog.

    Examples:

    \b
        # Run every conformance class
        gpkg-conformance validate sample.gpkg

    \b
        # Run selected classes and write both reports
        gpkg-conformance validate sample.gpkg --ics Core --ics Tiles \\
            --json report.json --xml testng-results.xml

    \b
        # Write both reports into the configured report directory
        gpkg-conformance validate sample.gpkg --reports

    \b
        # Take the container and classes from a run properties file
        gpkg-conformance validate --props test-run-props.xml
    """
    command_options = ValidateCommandOptions.from_kwargs(dict(options))
    request = resolve_request(container_path, command_options)
    runtime_config = ConfigLoader.load(config_file=command_options.config_file)

    container = DependencyContainer(
        verbose=command_options.verbose, console=console, config=runtime_config
    )
    try:
        gpkg = container.open_container(request.container_path)
    except ContainerError as e:
        raise click.ClickException(str(e)) from e
    with gpkg:
        result = container.create_orchestrator().run(gpkg, request.inclusion_set)

    json_path, xml_path = resolve_report_paths(
        command_options, runtime_config.report_dir
    )
    writer = container.create_report_writer()
    report_paths: list[Path] = []
    if json_path is not None:
        report_paths.append(writer.write_json(result, json_path))
    if xml_path is not None:
        report_paths.append(writer.write_xml(result, xml_path))

    SummaryPresenter(console).present(result, report_paths=report_paths)

    if result.failed:
        raise click.ClickException(
            f"{result.failed} of {result.total} requirement(s) failed"
        )
