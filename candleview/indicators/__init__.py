"""Moving-average indicators module."""

from candleview.indicators.overlays import (
    DEFAULT_OVERLAYS,
    compute_overlay,
    compute_overlays,
    parse_overlay,
)
from candleview.indicators.technical import calculate_ema, calculate_sma

__all__ = [
    "DEFAULT_OVERLAYS",
    "calculate_ema",
    "calculate_sma",
    "compute_overlay",
    "compute_overlays",
    "parse_overlay",
]
