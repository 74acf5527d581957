"""Candle (OHLCV) data model."""

from typing import Optional
from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLCV candle keyed by UNIX seconds."""

    time: int = Field(..., ge=0, description="Candle timestamp in UNIX seconds")
    open: float = Field(..., allow_inf_nan=False, description="Opening price")
    high: float = Field(..., allow_inf_nan=False, description="High price")
    low: float = Field(..., allow_inf_nan=False, description="Low price")
    close: float = Field(..., allow_inf_nan=False, description="Closing price")
    volume: Optional[float] = Field(
        default=None, allow_inf_nan=False, description="Traded volume, None when absent"
    )

    model_config = {"frozen": True}


# Ascending by time; produced once per upload and never mutated.
CandleSeries = tuple[Candle, ...]
