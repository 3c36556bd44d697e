"""Bugfilter CLI — entry point.

Commands:
    bugfilter parse <file>                          Parse and display bugs
    bugfilter find  <file> --state S --range R      Query by state and age
    bugfilter stats <file>                          Counts by state and age
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .application import Application
from .config import settings
from .errors import BugFilterError
from .models import Bug, State, TimeRange
from .parsers.json_parser import JsonBugParser

console = Console()
err_console = Console(stderr=True)

_STATE_CHOICES = [s.value for s in State]
_RANGE_CHOICES = [r.value for r in TimeRange]

# ── Helpers ─────────────────────────────────────────────────────────────────


def _load(file: Path, lenient: bool) -> list[Bug]:
    """Parse the whole file or exit with status 1 on the first typed error."""
    parser = JsonBugParser()
    try:
        return list(parser.parse_file(str(file), strict=not lenient))
    except BugFilterError as exc:
        err_console.print(f"[red]{type(exc).__name__}:[/red] {escape(str(exc))}")
        sys.exit(1)


def _now(epoch: int | None) -> datetime:
    if epoch is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


def _emit(bugs: list[Bug], output_fmt: str, title: str) -> None:
    if output_fmt == "json":
        for bug in bugs:
            click.echo(bug.to_json())
        return
    from .visualization.tables import print_bugs_table

    print_bugs_table(bugs, title=title, max_rows=settings.max_rows, console=console)


_output_option = click.option(
    "--output", "-o", "output_fmt", default=settings.default_output,
    type=click.Choice(["table", "json"], case_sensitive=False),
    help="Output format.",
    show_default=True,
)
_lenient_option = click.option(
    "--lenient", is_flag=True, help="Skip malformed lines instead of failing."
)
_now_option = click.option(
    "--now", "now_epoch", default=None, type=int,
    help="Reference instant as Unix epoch seconds (default: current time).",
)


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="bugfilter")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """bugfilter — parse bug reports and query them by state and age."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


# ── parse ────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_output_option
@_lenient_option
def parse(file: Path, output_fmt: str, lenient: bool) -> None:
    """Parse an NDJSON file of bugs and display them.

    \b
    Examples:
      bugfilter parse bugs.ndjson
      bugfilter parse bugs.ndjson --output json --lenient
    """
    bugs = _load(file, lenient)
    _emit(bugs, output_fmt, title=file.name)
    err_console.print(f"[dim]Parsed {len(bugs)} bugs from {file.name}[/dim]")


# ── find ─────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--state", "-s", required=True,
    type=click.Choice(_STATE_CHOICES, case_sensitive=False),
    help="Bug state to match.",
)
@click.option(
    "--range", "-r", "range_name", required=True,
    type=click.Choice(_RANGE_CHOICES, case_sensitive=False),
    help="Relative time bucket to match.",
)
@_now_option
@_output_option
@_lenient_option
def find(
    file: Path,
    state: str,
    range_name: str,
    now_epoch: int | None,
    output_fmt: str,
    lenient: bool,
) -> None:
    """Find bugs in a state whose timestamp falls in a time bucket.

    \b
    Examples:
      bugfilter find bugs.ndjson --state open --range past-day
      bugfilter find bugs.ndjson -s closed -r past-month --now 1493393946
    """
    app = Application(_load(file, lenient))
    results = app.find_bugs(State(state.lower()), TimeRange(range_name.lower()), now=_now(now_epoch))

    if not results and output_fmt != "json":
        err_console.print(f"[yellow]No {state} bugs in {range_name}[/yellow]")
        return
    _emit(results, output_fmt, title=f"{state} bugs, {range_name}")
    err_console.print(
        f"[dim]{len(results)} match{'es' if len(results) != 1 else ''} of {len(app)} bugs[/dim]"
    )


# ── stats ────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--by", "-b", default="matrix",
    type=click.Choice(["matrix", "state", "range"], case_sensitive=False),
    help="Grouping to count by.",
    show_default=True,
)
@_now_option
@_lenient_option
def stats(file: Path, by: str, now_epoch: int | None, lenient: bool) -> None:
    """Show bug counts by state and time bucket.

    \b
    Examples:
      bugfilter stats bugs.ndjson
      bugfilter stats bugs.ndjson --by range --now 1493393946
    """
    from .aggregators.counter import by_state, by_time_range, state_range_matrix
    from .visualization.tables import print_counter_table, print_matrix_table

    bugs = _load(file, lenient)
    now = _now(now_epoch)
    tz = settings.tzinfo()

    console.print(f"\n[bold]File:[/bold] {file.name}  [bold]Total bugs:[/bold] {len(bugs)}")
    if by == "matrix":
        print_matrix_table(state_range_matrix(bugs, now, tz), console=console)
    elif by == "state":
        counter = by_state().update(bugs)
        print_counter_table(counter.top(len(State)), title="Bugs by state", value_col="State", console=console)
    else:
        counter = by_time_range(now, tz).update(bugs)
        print_counter_table(counter.top(len(TimeRange)), title="Bugs by age", value_col="Range", console=console)


if __name__ == "__main__":
    main()
