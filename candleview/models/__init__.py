"""Data models for CandleView."""

from candleview.models.candle import Candle, CandleSeries
from candleview.models.indicator import IndicatorKind, IndicatorPoint, IndicatorSpec
from candleview.models.mapping import (
    MAPPING_FIELDS,
    REQUIRED_FIELDS,
    ColumnMapping,
    ColumnSuggestion,
    MatchConfidence,
)

__all__ = [
    "Candle",
    "CandleSeries",
    "ColumnMapping",
    "ColumnSuggestion",
    "IndicatorKind",
    "IndicatorPoint",
    "IndicatorSpec",
    "MAPPING_FIELDS",
    "MatchConfidence",
    "REQUIRED_FIELDS",
]
