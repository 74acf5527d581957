"""Indicator overlay data models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class IndicatorKind(str, Enum):
    """Supported moving-average overlays."""

    SMA = "sma"
    EMA = "ema"


class IndicatorPoint(BaseModel):
    """A single overlay value aligned to a candle time."""

    time: int = Field(..., description="UNIX seconds of the candle this value belongs to")
    value: float = Field(..., description="Indicator value")

    model_config = {"frozen": True}


class IndicatorSpec(BaseModel):
    """A configured overlay, e.g. SMA(20) or EMA(9)."""

    kind: IndicatorKind = Field(..., description="Moving-average type")
    period: int = Field(..., gt=0, description="Window length in candles")
    name: str = Field(default="", description="Display name, defaults to KIND(period)")
    color: Optional[str] = Field(default=None, description="Line color hint for the renderer")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        kind = data.get("kind")
        if isinstance(kind, str) and not isinstance(kind, IndicatorKind):
            data["kind"] = kind = kind.strip().lower()
        if not data.get("name") and kind is not None and data.get("period") is not None:
            label = kind.value if isinstance(kind, IndicatorKind) else kind
            data["name"] = f"{label.upper()}({data['period']})"
        return data
