"""Candle and overlay commands for CandleView CLI.

Compiles a CSV file into candles and displays the latest candles or
moving-average values.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from candleview.cli.common import (
    build_session,
    console,
    error_panel,
    mapping_options,
    parse_overlay_options,
    print_compile_summary,
)


def _format_time(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def _format_value(value: Optional[float]) -> str:
    return "—" if value is None else f"{value:,.2f}"


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-n", "--last", default=20, type=click.IntRange(min=1), help="Candles to show (default: 20)")
@mapping_options
@click.pass_context
def candles(ctx: click.Context, file: Path, last: int, assume_ms, yes: bool, **cols) -> None:
    """Compile FILE into candles and show the most recent ones.

    \b
    Examples:
      candleview candles nifty.csv
      candleview candles ticks.csv --ms -n 50
      candleview candles export.csv --close-col "Last Price"
    """
    session, _ = build_session(ctx, file, cols, assume_ms, yes)
    series = session.series
    print_compile_summary(session)

    if not series:
        error_panel("[yellow]No usable rows in file[/yellow]", title="No Candles")
        return

    shown = series[-last:]
    table = Table(
        title=f"{file.name} ({len(series)} candles)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date/Time (UTC)", style="dim")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right", style="bold")
    table.add_column("Volume", justify="right")

    for candle in shown:
        table.add_row(
            _format_time(candle.time),
            _format_value(candle.open),
            _format_value(candle.high),
            _format_value(candle.low),
            _format_value(candle.close),
            _format_value(candle.volume),
        )

    console.print(table)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-i", "--indicator",
    "indicators",
    multiple=True,
    help="Overlay like sma:20 or ema:9; repeatable (default from config)",
)
@click.option("-n", "--last", default=10, type=click.IntRange(min=1), help="Rows to show (default: 10)")
@mapping_options
@click.pass_context
def overlays(
    ctx: click.Context,
    file: Path,
    indicators: tuple[str, ...],
    last: int,
    assume_ms,
    yes: bool,
    **cols,
) -> None:
    """Compute moving-average overlays for FILE.

    \b
    Examples:
      candleview overlays nifty.csv                  # Overlays from config
      candleview overlays nifty.csv -i ema:9 -i ema:21
    """
    specs = parse_overlay_options(indicators)
    try:
        session, _ = build_session(ctx, file, cols, assume_ms, yes, overlays=specs)
    except ValueError as e:
        error_panel(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    print_compile_summary(session)
    series = session.series
    if not series:
        error_panel("[yellow]No usable rows in file[/yellow]", title="No Candles")
        return

    values = {name: {p.time: p.value for p in points} for name, points in session.overlays.items()}

    table = Table(
        title=f"{file.name} overlays",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date/Time (UTC)", style="dim")
    table.add_column("Close", justify="right", style="bold")
    for spec in session.specs:
        table.add_column(spec.name, justify="right", style="yellow")

    for candle in series[-last:]:
        table.add_row(
            _format_time(candle.time),
            _format_value(candle.close),
            *(_format_value(values[spec.name].get(candle.time)) for spec in session.specs),
        )

    console.print(table)

    for spec in session.specs:
        points = session.overlays[spec.name]
        if not points:
            console.print(f"[dim]{spec.name}: not enough candles ({len(series)} < {spec.period})[/dim]")
