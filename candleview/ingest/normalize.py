"""Cell-level cleansing for numbers and dates found in CSV exports.

Both functions are total: bad input degrades to NaN (numbers) or None
(dates) instead of raising, so a single garbled cell only costs its row.
"""

import math
import re
from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

# Thousands separators, whitespace and currency glyphs seen in broker exports
_NUMBER_NOISE = re.compile(r"[,\s₹$€£¥]")
_NO_VALUE = "--"
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# D/M/Y, Y/M/D with any of / . - as separators, optional time of day
_LOCAL_DATE = re.compile(
    r"(\d+)[/.\-](\d+)[/.\-](\d+)"
    r"(?:[ T](\d{1,2}):(\d{2})(?::(\d{2}))?)?",
    re.ASCII,
)

# Month-name dates as written by broker and spreadsheet exports
_MONTH_NAME_DATES = ("%d-%b-%Y", "%d %b %Y", "%b %d, %Y", "%d-%b-%y")
_TIME_SUFFIXES = ("", " %H:%M", " %H:%M:%S")

# Epoch values with more digits than this are milliseconds
_MAX_SECONDS_DIGITS = 10


def normalize_number(raw: Any) -> float:
    """Convert a raw cell into a float.

    Args:
        raw: A native number or a string such as "1,234.56", "₹ 99" or "--".

    Returns:
        The parsed value, or NaN when the cell holds no finite number.
    """
    if raw is None or isinstance(raw, bool):
        return float("nan")
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else float("nan")

    cleaned = _NUMBER_NOISE.sub("", str(raw)).replace(_NO_VALUE, "")
    if not _DECIMAL.fullmatch(cleaned):
        return float("nan")

    value = float(cleaned)
    return value if math.isfinite(value) else float("nan")


def _to_seconds(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())


def _parse_iso_or_rfc(text: str) -> Optional[datetime]:
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def _parse_month_name(text: str) -> Optional[datetime]:
    for date_format in _MONTH_NAME_DATES:
        for suffix in _TIME_SUFFIXES:
            try:
                parsed = datetime.strptime(text, date_format + suffix)
            except ValueError:
                continue
            return parsed.replace(tzinfo=timezone.utc)
    return None


def _parse_local_date(text: str) -> Optional[datetime]:
    match = _LOCAL_DATE.fullmatch(text)
    if match is None:
        return None

    p1, p2, p3, hour, minute, second = match.groups()
    if len(p3) == 4:
        day, month, year = p1, p2, p3
    elif len(p1) == 4:
        year, month, day = p1, p2, p3
    else:
        day, month, year = p1, p2, p3

    try:
        day_value = date.fromisoformat(f"{year}-{month.zfill(2)}-{day.zfill(2)}")
        time_value = time(int(hour or 0), int(minute or 0), int(second or 0))
    except ValueError:
        return None
    return datetime.combine(day_value, time_value, tzinfo=timezone.utc)


def parse_date_to_seconds(raw: Any, assume_milliseconds: bool = False) -> Optional[int]:
    """Convert a raw date cell into whole UNIX seconds.

    Strategies are tried in order:

    1. Digit-only text is an epoch. It is read as milliseconds when
       ``assume_milliseconds`` is set or it has more than 10 digits.
    2. ISO-8601 or RFC 2822 text. Values without an offset are UTC.
    3. Month-name dates such as ``31-Jan-2024``, ``31 Jan 2024`` or
       ``Jan 31, 2024``, optionally followed by ``HH:MM[:SS]``. UTC.
    4. Locale dates with ``/``, ``.`` or ``-`` separators. A 4-digit last
       part means D/M/Y, a 4-digit first part means Y/M/D, anything else
       falls back to D/M/Y.

    Args:
        raw: Cell value.
        assume_milliseconds: Treat every digit-only value as milliseconds.

    Returns:
        UNIX seconds, or None when no strategy understands the value.
    """
    if raw is None or isinstance(raw, bool):
        return None

    text = str(raw).strip()
    if not text:
        return None

    if text.isascii() and text.isdigit():
        epoch = int(text)
        if assume_milliseconds or len(text) > _MAX_SECONDS_DIGITS:
            return epoch // 1000
        return epoch

    parsed = (
        _parse_iso_or_rfc(text)
        or _parse_month_name(text)
        or _parse_local_date(text)
    )
    if parsed is None:
        return None
    try:
        return _to_seconds(parsed)
    except (OverflowError, OSError, ValueError):
        return None
