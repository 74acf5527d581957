"""Tests for moving-average indicators.

Reference fixtures are worked by hand; property tests compare the running
sum implementation against a direct mean over each window.
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from candleview.indicators import (
    DEFAULT_OVERLAYS,
    calculate_ema,
    calculate_sma,
    compute_overlays,
    parse_overlay,
)
from candleview.models import Candle, IndicatorKind, IndicatorPoint, IndicatorSpec


def create_test_candles(closes: list[float]) -> list[Candle]:
    """Create candles at times 1..n with the given closes."""
    return [
        Candle(time=i + 1, open=close, high=close, low=close, close=close)
        for i, close in enumerate(closes)
    ]


FIXTURE = create_test_candles([10, 11, 12, 13, 14])


@st.composite
def price_series(draw, min_length: int = 0, max_length: int = 120):
    """Generate a close series with positive prices."""
    closes = draw(st.lists(
        st.floats(min_value=0.01, max_value=10_000.0, allow_nan=False, allow_infinity=False),
        min_size=min_length,
        max_size=max_length,
    ))
    return create_test_candles(closes)


class TestSMA:
    """Simple moving average over closes."""

    def test_reference_windowing(self):
        result = calculate_sma(FIXTURE, 3)

        assert [p.time for p in result] == [3, 4, 5]
        assert [p.value for p in result] == pytest.approx([11.0, 12.0, 13.0])

    def test_period_one_echoes_closes(self):
        result = calculate_sma(FIXTURE, 1)

        assert [p.value for p in result] == [10, 11, 12, 13, 14]

    def test_period_longer_than_series(self):
        assert calculate_sma(FIXTURE, 6) == []

    def test_period_equal_to_series(self):
        assert calculate_sma(FIXTURE, 5) == [IndicatorPoint(time=5, value=12.0)]

    def test_empty_input(self):
        assert calculate_sma([], 3) == []

    @pytest.mark.parametrize("period", [0, -1, 2.5, True])
    def test_invalid_period_raises(self, period):
        with pytest.raises(ValueError):
            calculate_sma(FIXTURE, period)

    @given(candles=price_series(), period=st.integers(min_value=1, max_value=30))
    @settings(max_examples=100, deadline=None)
    def test_matches_window_mean(self, candles: list[Candle], period: int):
        result = calculate_sma(candles, period)

        assert len(result) == max(0, len(candles) - period + 1)
        for offset, point in enumerate(result):
            window = candles[offset:offset + period]
            expected = sum(c.close for c in window) / period
            assert point.time == window[-1].time
            assert math.isclose(point.value, expected, rel_tol=1e-9, abs_tol=1e-6)


class TestEMA:
    """Exponential moving average seeded with an SMA."""

    def test_reference_vector(self):
        result = calculate_ema(FIXTURE, 3)

        assert result == [
            IndicatorPoint(time=3, value=11.0),
            IndicatorPoint(time=4, value=12.0),
            IndicatorPoint(time=5, value=13.0),
        ]

    def test_fewer_candles_than_period(self):
        assert calculate_ema(FIXTURE[:2], 3) == []

    def test_empty_input(self):
        assert calculate_ema([], 9) == []

    def test_period_one_echoes_closes(self):
        result = calculate_ema(FIXTURE, 1)

        assert [p.value for p in result] == [10, 11, 12, 13, 14]

    @pytest.mark.parametrize("period", [0, -5, 1.0])
    def test_invalid_period_raises(self, period):
        with pytest.raises(ValueError):
            calculate_ema(FIXTURE, period)

    @given(candles=price_series(), period=st.integers(min_value=1, max_value=30))
    @settings(max_examples=100, deadline=None)
    def test_length_seed_and_bounds(self, candles: list[Candle], period: int):
        result = calculate_ema(candles, period)

        if len(candles) < period:
            assert result == []
            return

        assert len(result) == len(candles) - period + 1
        assert [p.time for p in result] == [c.time for c in candles[period - 1:]]

        seed = sum(c.close for c in candles[:period]) / period
        assert math.isclose(result[0].value, seed, rel_tol=1e-9)

        # EMA is a weighted average, so it stays within the range of closes seen
        lowest = min(c.close for c in candles)
        highest = max(c.close for c in candles)
        for point in result:
            assert lowest - 1e-6 <= point.value <= highest + 1e-6

    @given(candles=price_series(min_length=1))
    @settings(max_examples=50, deadline=None)
    def test_stateless_across_calls(self, candles: list[Candle]):
        assert calculate_ema(candles, 3) == calculate_ema(candles, 3)


class TestOverlays:
    """Named sets of SMA/EMA overlays."""

    def test_compute_named_overlays(self):
        specs = [
            IndicatorSpec(kind=IndicatorKind.SMA, period=3),
            IndicatorSpec(kind=IndicatorKind.EMA, period=3, name="fast"),
        ]

        result = compute_overlays(FIXTURE, specs)

        assert list(result) == ["SMA(3)", "fast"]
        assert result["fast"] == calculate_ema(FIXTURE, 3)
        assert result["SMA(3)"] == calculate_sma(FIXTURE, 3)

    def test_duplicate_names_raise(self):
        specs = [
            IndicatorSpec(kind="ema", period=9),
            IndicatorSpec(kind="ema", period=9),
        ]

        with pytest.raises(ValueError, match="Duplicate"):
            compute_overlays(FIXTURE, specs)

    def test_no_specs(self):
        assert compute_overlays(FIXTURE, []) == {}

    def test_default_overlay_is_sma_20(self):
        assert DEFAULT_OVERLAYS == (IndicatorSpec(kind=IndicatorKind.SMA, period=20),)

    @pytest.mark.parametrize(
        "text, kind, period",
        [
            ("sma:20", IndicatorKind.SMA, 20),
            ("EMA(9)", IndicatorKind.EMA, 9),
            ("ema 21", IndicatorKind.EMA, 21),
            ("Sma=50", IndicatorKind.SMA, 50),
        ],
    )
    def test_parse_overlay(self, text, kind, period):
        spec = parse_overlay(text)

        assert spec.kind is kind
        assert spec.period == period
        assert spec.name == f"{kind.value.upper()}({period})"

    @pytest.mark.parametrize("text", ["rsi:14", "sma", "sma:0", "20", "", "sma:-3"])
    def test_parse_overlay_rejects(self, text):
        with pytest.raises(ValueError):
            parse_overlay(text)


class TestIndicatorSpec:
    def test_kind_is_case_insensitive(self):
        assert IndicatorSpec(kind="SMA", period=5).kind is IndicatorKind.SMA

    def test_non_positive_period_rejected(self):
        with pytest.raises(ValueError):
            IndicatorSpec(kind="ema", period=0)

    def test_explicit_name_kept(self):
        assert IndicatorSpec(kind="ema", period=9, name="signal").name == "signal"
