"""Main CLI for lint-testdrive."""

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..core.config import load_config
from ..errors import ErrorTranslator
from ..golangci import GolangciLintError, GolangciLintRunner, load_findings
from ..report import ReportBuilder, ReportInputError, render_json, render_text
from ..sections import build_section_map, section_for
from ..utils.rich_logging import setup_rich_logging


console = Console()
err_console = Console(stderr=True)


def _fail(error: Exception) -> None:
    translator = ErrorTranslator()
    err_console.print(translator.format_for_cli(translator.translate(error)))
    raise SystemExit(1)


@click.group()
@click.option(
    "--config", "-c", "config_path",
    default="testdrive.yaml",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config with the checker catalog",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def cli(ctx, config_path, log_level):
    """Lint test drive - run every golangci-lint checker and compare them."""
    setup_rich_logging(log_level)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except (ValidationError, ValueError) as e:
        _fail(e)


@cli.command()
@click.option(
    "--sources-path", "-s",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Path to the Go sources",
)
@click.option(
    "--input", "-i", "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read saved golangci-lint JSON output instead of running it",
)
@click.option("--threshold", "-t", type=click.FloatRange(0.0, 1.0), help="Overlap share threshold")
@click.option(
    "--format", "output_format",
    default="text",
    type=click.Choice(["text", "json"]),
    help="Report format",
)
@click.option("--verbose", "-v", is_flag=True, help="List every finding with its source excerpt")
@click.pass_context
def run(ctx, sources_path, input_path, threshold, output_format, verbose):
    """Run golangci-lint with all the checkers and build a report."""
    config = ctx.obj["config"]
    report_config = config.report

    try:
        if input_path:
            findings = load_findings(input_path, report_config.sub_checker_pattern)
        else:
            runner = GolangciLintRunner(config.golangci_lint)
            findings = runner.collect(sources_path, report_config.sub_checker_pattern)

        checker_sections = build_section_map(
            config.checkers,
            report_config.section_order,
            findings=findings,
            unknown_checker_section=report_config.unknown_checker_section,
        )
        builder = ReportBuilder(
            overlap_threshold=report_config.overlap_threshold if threshold is None else threshold,
            section_order=report_config.section_order,
        )
        report = builder.build(findings, checker_sections)
    except (GolangciLintError, ReportInputError) as e:
        _fail(e)

    if output_format == "json":
        click.echo(render_json(report))
        return
    for line in render_text(report, verbose=verbose):
        console.print(line, markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.pass_context
def sections(ctx):
    """Show which section each cataloged checker is reported under."""
    config = ctx.obj["config"]
    order = config.report.section_order

    table = Table()
    table.add_column("Checker")
    table.add_column("Section")
    table.add_column("Presets")

    for checker in sorted(config.checkers, key=lambda c: c.name):
        section = "[dim]deprecated[/]" if checker.deprecated else section_for(checker, order)
        table.add_row(checker.name, section, ", ".join(checker.presets))

    console.print(table)
    console.print(f"[bold]{len(build_section_map(config.checkers, order))}[/] active checkers")


if __name__ == "__main__":
    cli()
