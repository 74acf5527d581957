"""Named overlay sets: any mix of SMA/EMA lines over one candle series."""

import re
from typing import Callable, Iterable, Sequence

from candleview.indicators.technical import calculate_ema, calculate_sma
from candleview.models import Candle, IndicatorKind, IndicatorPoint, IndicatorSpec

CALCULATORS: dict[IndicatorKind, Callable[[Sequence[Candle], int], list[IndicatorPoint]]] = {
    IndicatorKind.SMA: calculate_sma,
    IndicatorKind.EMA: calculate_ema,
}

DEFAULT_OVERLAYS = (IndicatorSpec(kind=IndicatorKind.SMA, period=20),)

# "sma:20", "EMA(9)", "ema 21", "sma=50"
_OVERLAY_TEXT = re.compile(r"\s*([a-zA-Z]+)\s*(?:[:=(]|\s)\s*(\d+)\s*\)?\s*")


def parse_overlay(text: str) -> IndicatorSpec:
    """Parse an overlay such as "sma:20" or "EMA(9)".

    Raises:
        ValueError: If the text is not KIND and PERIOD, or KIND is unknown.
    """
    match = _OVERLAY_TEXT.fullmatch(text)
    if match is None:
        raise ValueError(f"Invalid overlay '{text}', expected e.g. sma:20 or ema:9")

    kind, period = match.group(1).lower(), int(match.group(2))
    if kind not in {k.value for k in IndicatorKind}:
        raise ValueError(f"Unknown indicator '{kind}', choose from sma, ema")
    if period < 1:
        raise ValueError(f"Overlay period must be positive, got {period}")
    return IndicatorSpec(kind=kind, period=period)


def compute_overlay(candles: Sequence[Candle], spec: IndicatorSpec) -> list[IndicatorPoint]:
    """Compute one overlay line."""
    return CALCULATORS[spec.kind](candles, spec.period)


def compute_overlays(
    candles: Sequence[Candle],
    specs: Iterable[IndicatorSpec],
) -> dict[str, list[IndicatorPoint]]:
    """Compute every configured overlay, keyed by overlay name in spec order.

    Raises:
        ValueError: If two specs share a name.
    """
    result: dict[str, list[IndicatorPoint]] = {}
    for spec in specs:
        if spec.name in result:
            raise ValueError(f"Duplicate overlay name '{spec.name}'")
        result[spec.name] = compute_overlay(candles, spec)
    return result
