"""Plain-data payloads for the external chart surface.

The renderer takes candles as ``{time, open, high, low, close}`` and each
overlay as ``{time, value}``. Both use integer UNIX seconds so candles and
lines share one time axis.
"""

from typing import Any, Iterable, Mapping, Sequence

from candleview.models import Candle, IndicatorPoint, IndicatorSpec


def candles_payload(candles: Iterable[Candle]) -> list[dict[str, Any]]:
    """Convert candles to renderer records (volume is not plotted)."""
    return [c.model_dump(include={"time", "open", "high", "low", "close"}) for c in candles]


def overlay_payload(points: Iterable[IndicatorPoint]) -> list[dict[str, Any]]:
    """Convert overlay points to renderer records."""
    return [p.model_dump() for p in points]


def build_payload(
    candles: Sequence[Candle],
    overlays: Mapping[str, list[IndicatorPoint]],
    specs: Iterable[IndicatorSpec],
) -> dict[str, Any]:
    """Bundle candles and overlays into one JSON-serializable document.

    Args:
        candles: The candle series.
        overlays: Computed overlays keyed by spec name.
        specs: The specs the overlays were computed from, in display order.

    Returns:
        Dictionary with ``candles`` and ``overlays`` lists.
    """
    return {
        "candles": candles_payload(candles),
        "overlays": [
            {
                "name": spec.name,
                "kind": spec.kind.value,
                "period": spec.period,
                "color": spec.color,
                "data": overlay_payload(overlays.get(spec.name, [])),
            }
            for spec in specs
        ],
    }
