"""Export command for CandleView CLI.

Writes the candles and overlays as the JSON payload a chart surface
consumes.
"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from candleview.cli.common import (
    build_session,
    console,
    error_panel,
    mapping_options,
    parse_overlay_options,
)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON here instead of stdout",
)
@click.option(
    "-i", "--indicator",
    "indicators",
    multiple=True,
    help="Overlay like sma:20 or ema:9; repeatable (default from config)",
)
@mapping_options
@click.pass_context
def export(
    ctx: click.Context,
    file: Path,
    output: Optional[Path],
    indicators: tuple[str, ...],
    assume_ms,
    yes: bool,
    **cols,
) -> None:
    """Export FILE as chart JSON: candles plus overlay lines.

    \b
    Examples:
      candleview export nifty.csv -o chart.json
      candleview export nifty.csv -i sma:20 -i ema:9 | jq .overlays
    """
    from candleview.chart import build_payload

    specs = parse_overlay_options(indicators)
    try:
        session, _ = build_session(ctx, file, cols, assume_ms, yes, overlays=specs)
    except ValueError as e:
        error_panel(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    payload = build_payload(session.series, session.overlays, session.specs)
    text = json.dumps(payload, indent=2)

    if output is None:
        click.echo(text)
        return

    output.write_text(text + "\n", encoding="utf-8")
    console.print(
        f"[green]Wrote {len(payload['candles'])} candles and "
        f"{len(payload['overlays'])} overlays to {output}[/green]"
    )
