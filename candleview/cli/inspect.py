"""Columns command for CandleView CLI.

Shows how the CSV header was mapped to OHLCV fields.
"""

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from candleview.cli.common import console, read_csv
from candleview.models import MAPPING_FIELDS, REQUIRED_FIELDS, MatchConfidence

CONFIDENCE_STYLES = {
    MatchConfidence.WORD: ("word match", "green"),
    MatchConfidence.LETTER: ("single letter - verify", "yellow"),
    MatchConfidence.MANUAL: ("manual", "cyan"),
}


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def columns(file: Path) -> None:
    """Show the detected column mapping for a CSV FILE.

    \b
    Examples:
      candleview columns nifty.csv
    """
    from candleview.ingest import suggest_columns

    rows = read_csv(file)
    if not rows:
        raise SystemExit(1)

    headers = list(rows[0].keys())
    suggestion = suggest_columns(headers)

    table = Table(
        title=f"{file.name} - {len(rows)} rows",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Field")
    table.add_column("Column")
    table.add_column("Match")

    for field in MAPPING_FIELDS:
        header = getattr(suggestion.mapping, field)
        if header is None:
            status = "[red]missing[/red]" if field in REQUIRED_FIELDS else "[dim]not found[/dim]"
            table.add_row(field, "-", status)
            continue
        label, color = CONFIDENCE_STYLES[suggestion.confidence[field]]
        table.add_row(field, escape(header), f"[{color}]{label}[/{color}]")

    console.print(table)
    console.print(f"[dim]Headers: {escape(', '.join(headers))}[/dim]")

    if not suggestion.mapping.is_complete:
        console.print("[red]Mapping incomplete - pass the missing columns with --<field>-col[/red]")
    elif suggestion.needs_confirmation:
        console.print("[yellow]Some columns matched on a single letter - double check them[/yellow]")
    else:
        console.print("[green]Mapping complete[/green]")
