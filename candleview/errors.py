"""Exceptions raised by CandleView."""


class CandleviewError(Exception):
    """Base class for CandleView errors."""


class CSVReadError(CandleviewError):
    """The source file could not be decoded as CSV."""


class ConfigError(CandleviewError):
    """The configuration file is malformed or holds invalid values."""
