"""CLI entry point for record-grouper tool."""

import logging
from pathlib import Path

import click
from rich.console import Console

from record_grouper import __version__
from record_grouper.analysis.stats_presenter import display_run_summary, display_top_groups
from record_grouper.core.config import load_config
from record_grouper.core.pipeline import run_grouping
from record_grouper.error.cmd import handle_command_errors
from record_grouper.io.writer import export_groups_csv, write_groups

console = Console()


@click.command()
@click.version_option(version=__version__, prog_name="record-grouper")
@click.argument("input_path", type=click.Path(exists=True, file_okay=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Output file for the grouped records (default: output.txt)",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(1),
    default=None,
    help="Number of comparison workers (default: 32)",
)
@click.option("--delimiter", "-d", default=None, help="Field delimiter (default: ';')")
@click.option(
    "--backend",
    type=click.Choice(["process", "thread"]),
    default=None,
    help="Worker pool backend (default: process)",
)
@click.option(
    "--staging",
    type=click.Choice(["memory", "sqlite"]),
    default=None,
    help="Staging store for raw lines (default: memory)",
)
@click.option(
    "--distinct-content",
    is_flag=True,
    default=False,
    help="Collapse records with identical fields within a group",
)
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Also export group membership as CSV",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    default=None,
    help="JSON configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_command_errors
def main(
    input_path: str,
    output: str | None,
    workers: int | None,
    delimiter: str | None,
    backend: str | None,
    staging: str | None,
    distinct_content: bool,
    csv_path: str | None,
    config_path: str | None,
    verbose: bool,
):
    """Group delimited records that share field values.

    Reads INPUT_PATH (plain or gzip-compressed, one record per line) and
    writes every group of two or more transitively related records,
    largest group first.

    \b
    Example:
        record-grouper lng.txt.gz -o groups.txt --workers 8
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config(Path(config_path) if config_path else None)
    if output is not None:
        config.output.output_path = Path(output)
    if csv_path is not None:
        config.output.csv_path = Path(csv_path)
    if workers is not None:
        config.grouping.max_workers = workers
    if backend is not None:
        config.grouping.backend = backend
    if distinct_content:
        config.grouping.distinct_content = True
    if staging is not None:
        config.input.staging = staging
    if delimiter is not None:
        if not delimiter:
            raise ValueError("Delimiter must be a non-empty string")
        config.input.delimiter = delimiter

    console.print(f"[blue]Reading:[/blue] {input_path}")
    run = run_grouping(Path(input_path), config)

    display_run_summary(run.summary, console)
    if verbose:
        display_top_groups(run.groups, console, delimiter=config.input.delimiter)

    destination = write_groups(
        run.groups, config.output.output_path, delimiter=config.input.delimiter
    )
    console.print(f"[green]Groups saved to:[/green] {destination}")

    if config.output.csv_path is not None:
        csv_destination = export_groups_csv(
            run.groups, config.output.csv_path, delimiter=config.input.delimiter
        )
        console.print(f"[green]CSV saved to:[/green] {csv_destination}")

    console.print(f"[bold green]Groups with more than one record: {len(run.groups)}[/bold green]")


if __name__ == "__main__":
    main()
