"""Header introspection: guess which CSV columns hold the OHLCV fields."""

from typing import Iterable, Optional

from candleview.models import (
    MAPPING_FIELDS,
    ColumnMapping,
    ColumnSuggestion,
    MatchConfidence,
)

# Substrings searched (case-insensitively) in every header, per field.
# Single letters are weak signals: "c" also matches "Country".
FIELD_CANDIDATES: dict[str, tuple[str, ...]] = {
    "date": ("timestamp", "date", "time"),
    "open": ("open", "o"),
    "high": ("high", "h"),
    "low": ("low", "l"),
    "close": ("close", "c", "last"),
    "volume": ("volume", "vol", "v"),
}


def _match(header: str, candidates: tuple[str, ...]) -> Optional[MatchConfidence]:
    lowered = header.lower()
    hits = [c for c in candidates if c in lowered]
    if not hits:
        return None
    if lowered.strip() in candidates or any(len(c) > 1 for c in hits):
        return MatchConfidence.WORD
    return MatchConfidence.LETTER


def suggest_columns(headers: Iterable[str]) -> ColumnSuggestion:
    """Suggest a column mapping along with a confidence per field.

    For each field the first header (in header order) containing any of the
    field's candidate substrings wins. The same header may be picked for
    several fields.

    Args:
        headers: CSV header names in file order.

    Returns:
        ColumnSuggestion whose ``needs_confirmation`` flags bare-letter matches.
    """
    headers = list(headers)
    selected: dict[str, str] = {}
    confidence: dict[str, MatchConfidence] = {}

    for field in MAPPING_FIELDS:
        for header in headers:
            level = _match(header, FIELD_CANDIDATES[field])
            if level is not None:
                selected[field] = header
                confidence[field] = level
                break

    return ColumnSuggestion(mapping=ColumnMapping(**selected), confidence=confidence)


def detect_columns(headers: Iterable[str]) -> ColumnMapping:
    """Guess the column mapping from header names. Unmatched fields stay None."""
    return suggest_columns(headers).mapping
