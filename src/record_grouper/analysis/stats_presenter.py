"""Presentation layer for run summaries.

Renders the structured stats returned by the pipeline as Rich tables,
keeping display logic out of the command.
"""

from rich.console import Console
from rich.table import Table

from record_grouper.analysis.group_assembler import RecordGroup
from record_grouper.analysis.run_summary import RunSummary


def display_run_summary(summary: RunSummary, console: Console) -> None:
    """Display the run summary as Rich tables.

    Args:
        summary: Summary returned by the pipeline
        console: Rich console for output

    Displays two tables:
    1. Counts (records, comparisons, related pairs, groups)
    2. Stage timing (load, group, assemble, total)
    """
    table = Table(title="Grouping Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    grouping = summary.grouping
    assembly = summary.assembly
    table.add_row("Records loaded", str(summary.records_loaded))
    table.add_row("Comparisons", str(grouping.comparisons))
    table.add_row("Related pairs", str(grouping.related_pairs))
    table.add_row("Workers", str(grouping.workers))
    table.add_row("Tasks", str(grouping.tasks))
    table.add_row("Groups formed", str(assembly.groups_formed))
    table.add_row("Records grouped", str(assembly.records_grouped))
    table.add_row("Largest group", str(assembly.largest_group))
    table.add_row("Singletons dropped", str(assembly.singletons_dropped))
    if assembly.collapsed_groups:
        table.add_row("Collapsed to one record", str(assembly.collapsed_groups))

    console.print(table)

    timing = Table(title="Stage Timing")
    timing.add_column("Stage", style="cyan")
    timing.add_column("Seconds", style="green", justify="right")
    timing.add_row("Load", f"{summary.load_seconds:.3f}")
    timing.add_row("Group", f"{grouping.elapsed_seconds:.3f}")
    timing.add_row("Assemble", f"{summary.assemble_seconds:.3f}")
    timing.add_row("Total", f"{summary.total_seconds:.3f}")

    console.print(timing)


def display_top_groups(
    groups: list[RecordGroup], console: Console, limit: int = 10, delimiter: str = ";"
) -> None:
    """Display the largest groups with their size and arity."""
    if not groups:
        console.print("[yellow]No groups with more than one record[/yellow]")
        return

    table = Table(title=f"Top {min(limit, len(groups))} Groups")
    table.add_column("Group", style="cyan", justify="right")
    table.add_column("Size", style="green", justify="right")
    table.add_column("Arity", justify="right")
    table.add_column("First member")

    for group in groups[:limit]:
        table.add_row(
            str(group.group_id),
            str(group.size),
            str(group.arity),
            group.members[0].join(delimiter),
        )

    console.print(table)
