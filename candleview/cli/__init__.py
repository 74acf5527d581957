"""CLI commands for CandleView.

This package provides the command-line interface for CandleView:
column detection, candle compilation, overlays and payload export.
"""

from candleview.cli.main import cli, main

__all__ = ["cli", "main"]
