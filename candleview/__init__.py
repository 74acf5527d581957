"""CandleView - turn OHLC(V) CSV exports into candles and moving-average overlays."""

__version__ = "0.1.0"
