"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Iterable, NoReturn, Optional, Annotated, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import TimerangeConfig, load_config
from ..domain.exceptions import TimerangeError
from ..domain.models import DISPLAY_FORMAT, Timerange, as_list

app = typer.Typer(
    name="timerange",
    help="Inspect, combine and split timezone-aware time ranges",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./timerange.yaml if present"),
]
TimezoneOption = Annotated[
    Optional[str],
    typer.Option("--tz", help="IANA timezone, e.g. Europe/Berlin. Overrides the config."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _setup(config_file: Optional[Path], tz: Optional[str], verbose: bool) -> Tuple[TimerangeConfig, str]:
    """
    Configure logging and resolve the configuration and timezone for a command.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )

    config = load_config(config_file)
    timezone = tz or config.resolve_timezone()
    return config, timezone


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _render_ranges(title: str, ranges: Iterable[Timerange]) -> None:
    """Print ranges as a table, one row per range."""
    ranges = list(ranges)

    if not ranges:
        console.print(f"[yellow]{title}: nothing left.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", style="bold")
    table.add_column("End", style="bold")
    table.add_column("Minutes", justify="right")

    for idx, timerange in enumerate(ranges, 1):
        table.add_row(
            str(idx),
            timerange.start.format(DISPLAY_FORMAT),
            timerange.end.format(DISPLAY_FORMAT),
            str(timerange.duration_minutes())
        )

    console.print(table)
    console.print(f"[green]{len(ranges)} range(s) in {ranges[0].timezone}[/green]")


@app.command()
def show(
    start: Annotated[str, typer.Argument(help="Start date-time, e.g. '2018-07-04 13:00'")],
    end: Annotated[Optional[str], typer.Argument(help="Exclusive end date-time. Defaults to one week after start.")] = None,
    tz: TimezoneOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Show how a range is normalized.

    Examples:

        timerange show "2018-07-04 13:00" "2018-07-12 15:00" --tz Europe/Berlin
    """
    try:
        _, timezone = _setup(config_file, tz, verbose)
        timerange = Timerange(start, end, timezone)
    except (TimerangeError, FileNotFoundError, ValueError) as e:
        _fail(e)

    _render_ranges("Timerange", [timerange])


@app.command()
def split(
    start: Annotated[str, typer.Argument(help="Start date-time")],
    end: Annotated[str, typer.Argument(help="Exclusive end date-time")],
    step: Annotated[Optional[int], typer.Option("--step", "-s", help="Size of each piece")] = None,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u", help="Unit of --step (minute, hour, day, ...)")] = None,
    stride: Annotated[Optional[int], typer.Option("--stride", help="Distance between piece starts. Defaults to --step.")] = None,
    stride_unit: Annotated[Optional[str], typer.Option("--stride-unit", help="Unit of --stride. Defaults to --unit.")] = None,
    drop_short_tail: Annotated[Optional[bool], typer.Option("--drop-short-tail/--keep-short-tail", help="Drop pieces cut short by the end of the range.")] = None,
    tz: TimezoneOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Split a range into pieces.

    Examples:

        timerange split "2018-07-12 15:00" "2018-07-14 18:00" --step 1 --unit hour

        # Overlapping one-hour windows every 30 minutes
        timerange split "2018-07-12 15:00" "2018-07-14 18:00" -s 1 -u hour --stride 30 --stride-unit minute
    """
    try:
        config, timezone = _setup(config_file, tz, verbose)
        defaults = config.split

        # Command line wins over the config file; a step given on the command
        # line also replaces the configured stride
        step_size = step if step is not None else defaults.step_size
        step_unit = unit or defaults.step_unit
        if stride is None and step is None:
            stride = defaults.stride_size
        if stride_unit is None and unit is None:
            stride_unit = defaults.stride_unit
        drop = drop_short_tail if drop_short_tail is not None else defaults.drop_short_tail

        pieces = Timerange(start, end, timezone).split(
            step_size,
            step_unit,
            drop,
            stride,
            stride_unit,
        )
    except (TimerangeError, FileNotFoundError, ValueError) as e:
        _fail(e)

    _render_ranges(f"Pieces of {step_size} {step_unit}", pieces)


@app.command()
def add(
    first_start: Annotated[str, typer.Argument(help="Start of the first range")],
    first_end: Annotated[str, typer.Argument(help="End of the first range")],
    second_start: Annotated[str, typer.Argument(help="Start of the second range")],
    second_end: Annotated[str, typer.Argument(help="End of the second range")],
    tz: TimezoneOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Union of two ranges: one merged range, or both ranges if they are disjoint.
    """
    try:
        _, timezone = _setup(config_file, tz, verbose)
        first = Timerange(first_start, first_end, timezone)
        second = Timerange(second_start, second_end, timezone)
        result = first.add(second)
    except (TimerangeError, FileNotFoundError, ValueError) as e:
        _fail(e)

    _render_ranges("Union", as_list(result))


@app.command()
def subtract(
    first_start: Annotated[str, typer.Argument(help="Start of the range to subtract from")],
    first_end: Annotated[str, typer.Argument(help="End of the range to subtract from")],
    second_start: Annotated[str, typer.Argument(help="Start of the range to remove")],
    second_end: Annotated[str, typer.Argument(help="End of the range to remove")],
    tz: TimezoneOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Remove the second range from the first one.
    """
    try:
        _, timezone = _setup(config_file, tz, verbose)
        first = Timerange(first_start, first_end, timezone)
        second = Timerange(second_start, second_end, timezone)
        result = first.subtract(second)
    except (TimerangeError, FileNotFoundError, ValueError) as e:
        _fail(e)

    _render_ranges("Difference", as_list(result))


@app.command()
def compare(
    first_start: Annotated[str, typer.Argument(help="Start of the first range")],
    first_end: Annotated[str, typer.Argument(help="End of the first range")],
    second_start: Annotated[str, typer.Argument(help="Start of the second range")],
    second_end: Annotated[str, typer.Argument(help="End of the second range")],
    tz: TimezoneOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Evaluate every relation between two ranges.
    """
    try:
        _, timezone = _setup(config_file, tz, verbose)
        first = Timerange(first_start, first_end, timezone)
        second = Timerange(second_start, second_end, timezone)
    except (TimerangeError, FileNotFoundError, ValueError) as e:
        _fail(e)

    relations = {
        "is_same": first.is_same(second),
        "contains": first.contains(second),
        "strictly_contains": first.strictly_contains(second),
        "overlaps": first.overlaps(second),
        "is_before": first.is_before(second),
        "is_after": first.is_after(second),
        "is_adjacent": first.is_adjacent(second),
    }

    table = Table(
        title=f"{first} vs {second}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Relation", style="bold yellow")
    table.add_column("Result")

    for name, value in relations.items():
        table.add_row(name, "[green]yes[/green]" if value else "[red]no[/red]")

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]timerange[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
