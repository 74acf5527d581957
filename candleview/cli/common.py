"""Helpers shared by the CandleView commands."""

from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from candleview.models import MAPPING_FIELDS, ColumnSuggestion

console = Console()


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def get_settings(ctx: click.Context):
    """Load settings for the current invocation, exiting on a bad config."""
    from candleview.config import load_settings
    from candleview.errors import ConfigError

    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_settings(config_path)
    except ConfigError as e:
        error_panel(f"[red]Configuration error:[/red]\n\n{escape(str(e))}")
        raise SystemExit(1)


def read_csv(path: Path) -> list[dict[str, str]]:
    """Read raw rows, exiting with an error panel on malformed files."""
    from candleview.errors import CSVReadError
    from candleview.ingest import read_rows

    try:
        rows = read_rows(path)
    except CSVReadError as e:
        error_panel(f"[red]Failed to read {escape(path.name)}:[/red]\n\n{escape(str(e))}")
        raise SystemExit(1)

    if not rows:
        console.print(Panel(
            f"[yellow]No rows parsed from {path.name}[/yellow]",
            title="[bold yellow]No Data[/bold yellow]",
            border_style="yellow",
        ))
    return rows


def mapping_options(func: Callable) -> Callable:
    """Add the column override, millisecond and confirmation options."""
    for field in reversed(MAPPING_FIELDS):
        func = click.option(
            f"--{field}-col",
            f"{field}_col",
            default=None,
            help=f"Header holding the {field} values (overrides detection)",
        )(func)
    func = click.option(
        "--ms/--no-ms",
        "assume_ms",
        default=None,
        help="Read digit-only dates as epoch milliseconds (default from config)",
    )(func)
    func = click.option(
        "-y", "--yes",
        is_flag=True,
        help="Accept low-confidence column matches without asking",
    )(func)
    return func


def resolve_mapping(
    headers: list[str],
    overrides: dict[str, Optional[str]],
    assume_yes: bool,
) -> ColumnSuggestion:
    """Detect columns, apply overrides and confirm weak matches.

    Exits when a required column is missing, an override names an unknown
    header, or the user rejects a low-confidence match.
    """
    from candleview.ingest import suggest_columns

    unknown = [h for h in overrides.values() if h is not None and h not in headers]
    if unknown:
        error_panel(
            f"[red]Unknown column(s): {escape(', '.join(unknown))}[/red]\n\n"
            f"Available: {escape(', '.join(headers))}"
        )
        raise SystemExit(1)

    suggestion = suggest_columns(headers).with_overrides(**overrides)
    mapping = suggestion.mapping

    if not mapping.is_complete:
        error_panel(
            f"[red]Could not detect column(s): {', '.join(mapping.missing())}[/red]\n\n"
            "Select them with [cyan]--date-col[/cyan], [cyan]--open-col[/cyan], "
            "[cyan]--high-col[/cyan], [cyan]--low-col[/cyan], [cyan]--close-col[/cyan].",
            title="Incomplete Mapping",
        )
        raise SystemExit(1)

    weak = suggestion.low_confidence_fields
    if weak and not assume_yes:
        guesses = ", ".join(f"{name} -> '{escape(getattr(mapping, name))}'" for name in weak)
        console.print(f"[yellow]Low-confidence column matches:[/yellow] {guesses}")
        if not click.confirm("Use these columns?", default=False):
            console.print("[dim]Aborted. Pick columns with --<field>-col.[/dim]")
            raise SystemExit(1)

    return suggestion


def collect_overrides(**cols: Optional[str]) -> dict[str, Optional[str]]:
    """Turn ``date_col=...`` keyword options into mapping field overrides."""
    return {name[: -len("_col")]: value for name, value in cols.items()}


def build_session(
    ctx: click.Context,
    path: Path,
    cols: dict[str, Optional[str]],
    assume_ms: Optional[bool],
    assume_yes: bool,
    overlays=None,
):
    """Read, map and compile a CSV file into a ChartSession.

    Returns:
        Tuple of (session, suggestion).
    """
    from candleview.session import ChartSession

    settings = get_settings(ctx)
    rows = read_csv(path)
    if not rows:
        raise SystemExit(1)
    headers = list(rows[0].keys())

    suggestion = resolve_mapping(headers, collect_overrides(**cols), assume_yes)

    session = ChartSession(
        overlays=overlays if overlays else settings.overlays,
        assume_milliseconds=settings.assume_milliseconds if assume_ms is None else assume_ms,
    )
    session.load(rows, suggestion.mapping)
    return session, suggestion


def print_compile_summary(session) -> None:
    """Print how many rows became candles."""
    result = session.last_result
    if result is None:
        return
    line = f"[dim]{result.total} rows -> {len(result.candles)} candles"
    if result.dropped:
        line += (
            f" ({result.dropped_bad_date} bad date, "
            f"{result.dropped_bad_price} missing OHLC dropped)"
        )
    console.print(line + "[/dim]")


def parse_overlay_options(values: tuple[str, ...]) -> list:
    """Parse repeated ``-i`` options into IndicatorSpecs."""
    from candleview.indicators import parse_overlay

    specs = []
    for value in values:
        try:
            specs.append(parse_overlay(value))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'-i' / '--indicator'")
    return specs
