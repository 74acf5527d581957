"""Moving-average calculations over a candle series.

Both indicators recompute the whole output from the whole series on every
call; there is no incremental state kept between calls.
"""

from collections import deque
from typing import Sequence

from candleview.models import Candle, IndicatorPoint


def _check_period(period: int) -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise ValueError(f"period must be a positive integer, got {period!r}")


def calculate_sma(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """Calculate Simple Moving Average of closes.

    Uses a running sum over a sliding window, so the cost is O(n).

    Args:
        candles: Candle series sorted by time
        period: Number of candles in the window

    Returns:
        One point per candle from the `period`-th onwards.

    Raises:
        ValueError: If period is not a positive integer. A non-positive
            period is a caller error and raises rather than returning an
            empty list; empty input with a valid period returns [].
    """
    _check_period(period)

    result: list[IndicatorPoint] = []
    window: deque[float] = deque()
    total = 0.0

    for candle in candles:
        window.append(candle.close)
        total += candle.close
        if len(window) > period:
            total -= window.popleft()
        if len(window) == period:
            result.append(IndicatorPoint(time=candle.time, value=total / period))

    return result


def calculate_ema(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """Calculate Exponential Moving Average of closes.

    The first value is the SMA of the first `period` closes, emitted at the
    `period`-th candle. Each later value is
    ``(close - prev) * k + prev`` with ``k = 2 / (period + 1)``.

    Args:
        candles: Candle series sorted by time
        period: Number of periods for the EMA

    Returns:
        One point per candle from the `period`-th onwards, or an empty list
        when there are fewer than `period` candles.

    Raises:
        ValueError: If period is not a positive integer. As with
            calculate_sma, a non-positive period raises rather than
            returning an empty list.
    """
    _check_period(period)

    if len(candles) < period:
        return []

    multiplier = 2 / (period + 1)

    # First EMA is SMA
    ema = sum(c.close for c in candles[:period]) / period
    result = [IndicatorPoint(time=candles[period - 1].time, value=ema)]

    for candle in candles[period:]:
        ema = (candle.close - ema) * multiplier + ema
        result.append(IndicatorPoint(time=candle.time, value=ema))

    return result
