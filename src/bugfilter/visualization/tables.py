"""Rich-powered table rendering for bug query results."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from ..models import Bug, State, TimeRange

_console = Console()

_STATE_STYLE = {State.OPEN: "red", State.CLOSED: "green"}


def print_bugs_table(
    bugs: list[Bug],
    title: str = "Bugs",
    max_rows: int = 100,
    console: Console | None = None,
) -> None:
    """Render bugs as a Rich table, one row per bug in collection order.

    Args:
        bugs:      Bugs to display.
        title:     Table title shown in the header.
        max_rows:  Hard cap — longer lists are truncated with a notice.
        console:   Target console; defaults to stdout.
    """
    out = console or _console
    if not bugs:
        out.print("[yellow]No bugs to display.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("State")
    table.add_column("Timestamp (UTC)")
    table.add_column("Comment", overflow="fold", max_width=60)

    for idx, bug in enumerate(bugs[:max_rows], start=1):
        table.add_row(
            str(idx),
            bug.state.value,
            bug.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            bug.comment,
            style=_STATE_STYLE.get(bug.state, ""),
        )

    out.print(table)
    if len(bugs) > max_rows:
        out.print(f"[dim]... and {len(bugs) - max_rows} more rows[/dim]")


def print_matrix_table(
    matrix: dict[State, dict[TimeRange, int]],
    title: str = "Bugs by state and age",
    console: Console | None = None,
) -> None:
    """Render a state × time-range count matrix."""
    out = console or _console
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("State", style="bold")
    for time_range in TimeRange:
        table.add_column(time_range.value, justify="right", style="cyan")
    table.add_column("total", justify="right", style="bold cyan")

    for state, row in matrix.items():
        counts = [row[r] for r in TimeRange]
        table.add_row(state.value, *[str(c) for c in counts], str(sum(counts)))

    out.print(table)


def print_counter_table(
    counts: list[tuple[str, int]],
    title: str = "Counts",
    value_col: str = "Value",
    count_col: str = "Count",
    console: Console | None = None,
) -> None:
    """Render a Counter.top() result as a Rich table."""
    out = console or _console
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("#", style="dim", width=4)
    table.add_column(value_col)
    table.add_column(count_col, justify="right", style="cyan")

    for rank, (value, count) in enumerate(counts, start=1):
        table.add_row(str(rank), value, str(count))

    out.print(table)
