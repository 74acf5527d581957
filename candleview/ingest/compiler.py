"""Compile raw CSV rows into a time-ordered candle series."""

import logging
import math
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from candleview.ingest.normalize import normalize_number, parse_date_to_seconds
from candleview.models import Candle, CandleSeries, ColumnMapping

logger = logging.getLogger(__name__)

RawRow = Mapping[str, Optional[str]]


class CompileResult(BaseModel):
    """Compiled candles plus how many rows were dropped and why."""

    candles: CandleSeries = Field(default=(), description="Candles sorted by time")
    total: int = Field(default=0, ge=0, description="Rows offered to the compiler")
    dropped_bad_date: int = Field(default=0, ge=0, description="Rows with unusable dates")
    dropped_bad_price: int = Field(default=0, ge=0, description="Rows missing an OHLC value")
    mapping_complete: bool = Field(default=True, description="Whether compilation ran at all")

    model_config = {"frozen": True}

    @property
    def dropped(self) -> int:
        return self.dropped_bad_date + self.dropped_bad_price


def compile_report(
    rows: Iterable[RawRow],
    mapping: ColumnMapping,
    assume_milliseconds: bool = False,
) -> CompileResult:
    """Compile rows into candles and report what was discarded.

    A row survives only if its date parses to non-negative seconds and all
    four of open/high/low/close parse to finite numbers. Volume is optional:
    an unparseable volume just leaves it absent. Survivors are sorted by time
    with a stable sort, so rows sharing a timestamp keep their file order.

    Args:
        rows: Header-keyed raw rows, as produced by the CSV reader.
        mapping: Column mapping. Nothing is compiled unless it is complete.
        assume_milliseconds: Forwarded to the date parser.

    Returns:
        CompileResult with the new candle series.
    """
    rows = list(rows)
    if not mapping.is_complete:
        logger.warning(
            "Column mapping incomplete, missing: %s", ", ".join(mapping.missing())
        )
        return CompileResult(total=len(rows), mapping_complete=False)

    candles: list[Candle] = []
    bad_date = 0
    bad_price = 0

    for row in rows:
        time = parse_date_to_seconds(row.get(mapping.date), assume_milliseconds)
        if time is None or time < 0:
            bad_date += 1
            continue

        prices = [
            normalize_number(row.get(column))
            for column in (mapping.open, mapping.high, mapping.low, mapping.close)
        ]
        if any(math.isnan(p) for p in prices):
            bad_price += 1
            continue

        volume = None
        if mapping.volume:
            parsed = normalize_number(row.get(mapping.volume))
            if not math.isnan(parsed):
                volume = parsed

        open_, high, low, close = prices
        candles.append(
            Candle(time=time, open=open_, high=high, low=low, close=close, volume=volume)
        )

    candles.sort(key=lambda c: c.time)

    if bad_date or bad_price:
        logger.debug(
            "Dropped %d of %d rows (%d bad date, %d bad price)",
            bad_date + bad_price, len(rows), bad_date, bad_price,
        )

    return CompileResult(
        candles=tuple(candles),
        total=len(rows),
        dropped_bad_date=bad_date,
        dropped_bad_price=bad_price,
    )


def compile_rows(
    rows: Iterable[RawRow],
    mapping: ColumnMapping,
    assume_milliseconds: bool = False,
) -> CandleSeries:
    """Compile rows into a candle series. Never raises for bad data."""
    return compile_report(rows, mapping, assume_milliseconds).candles
