"""Tests for header-based column detection.

**Feature: csv-ingestion**
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from candleview.ingest import FIELD_CANDIDATES, detect_columns, suggest_columns
from candleview.models import ColumnMapping, MatchConfidence


class TestDetectColumns:
    """Column detection picks the first header containing a candidate."""

    def test_standard_headers(self):
        mapping = detect_columns(["Date", "Open", "High", "Low", "Close", "Volume"])

        assert mapping == ColumnMapping(
            date="Date", open="Open", high="High", low="Low", close="Close", volume="Volume"
        )
        assert mapping.is_complete

    def test_case_insensitive(self):
        mapping = detect_columns(["TIMESTAMP", "OPEN", "HIGH", "LOW", "CLOSE", "VOL"])

        assert mapping.date == "TIMESTAMP"
        assert mapping.close == "CLOSE"
        assert mapping.volume == "VOL"

    def test_single_letter_headers(self):
        mapping = detect_columns(["timestamp", "o", "h", "l", "c", "v"])

        assert mapping == ColumnMapping(
            date="timestamp", open="o", high="h", low="l", close="c", volume="v"
        )

    def test_last_price_is_close(self):
        mapping = detect_columns(["Time", "Open", "High", "Low", "Last"])

        assert mapping.close == "Last"
        assert mapping.date == "Time"

    def test_first_matching_header_wins(self):
        # "Country" contains both "o" and "c", and comes first
        mapping = detect_columns(["Country", "Date", "Open", "High", "Low", "Close"])

        assert mapping.open == "Country"
        assert mapping.close == "Country"
        assert mapping.high == "High"

    def test_missing_fields_stay_unset(self):
        mapping = detect_columns(["Symbol", "Price"])

        assert mapping.date is None
        assert mapping.high is None
        assert mapping.volume is None
        assert not mapping.is_complete
        assert mapping.missing() == ["date", "high"]

    def test_empty_headers(self):
        mapping = detect_columns([])

        assert mapping == ColumnMapping()
        assert mapping.missing() == ["date", "open", "high", "low", "close"]

    def test_volume_is_optional(self):
        mapping = detect_columns(["Date", "Open", "High", "Low", "Close"])

        assert mapping.volume is None
        assert mapping.is_complete

    @given(headers=st.lists(st.text(max_size=12), max_size=8))
    @settings(max_examples=100)
    def test_only_headers_from_input_are_chosen(self, headers: list[str]):
        mapping = detect_columns(headers)

        for field, candidates in FIELD_CANDIDATES.items():
            chosen = getattr(mapping, field)
            if chosen is None:
                assert not any(c in h.lower() for h in headers for c in candidates)
            else:
                assert chosen in headers
                assert any(c in chosen.lower() for c in candidates)

    @given(headers=st.lists(st.text(max_size=12), max_size=8))
    @settings(max_examples=50)
    def test_deterministic(self, headers: list[str]):
        assert detect_columns(headers) == detect_columns(list(headers))


class TestSuggestColumns:
    """Suggestions flag bare-letter matches for confirmation."""

    def test_word_matches_need_no_confirmation(self):
        suggestion = suggest_columns(["Date", "Open", "High", "Low", "Close", "Volume"])

        assert set(suggestion.confidence.values()) == {MatchConfidence.WORD}
        assert not suggestion.needs_confirmation

    def test_exact_single_letter_header_is_a_word_match(self):
        suggestion = suggest_columns(["t", "timestamp", "O", "H", "L", "C"])

        assert suggestion.confidence["open"] is MatchConfidence.WORD
        assert not suggestion.needs_confirmation

    def test_letter_inside_unrelated_header_needs_confirmation(self):
        suggestion = suggest_columns(["Country", "Date", "Open", "High", "Low", "Close"])

        assert suggestion.confidence["open"] is MatchConfidence.LETTER
        assert suggestion.confidence["close"] is MatchConfidence.LETTER
        assert suggestion.confidence["date"] is MatchConfidence.WORD
        assert suggestion.needs_confirmation
        assert suggestion.low_confidence_fields == ["open", "close"]

    def test_overrides_become_manual(self):
        suggestion = suggest_columns(["Country", "Date", "Open", "High", "Low", "Close"])
        fixed = suggestion.with_overrides(open="Open", close="Close", volume=None)

        assert fixed.mapping.open == "Open"
        assert fixed.mapping.close == "Close"
        assert fixed.confidence["open"] is MatchConfidence.MANUAL
        assert not fixed.needs_confirmation
        # original suggestion is untouched
        assert suggestion.mapping.open == "Country"

    def test_unmatched_fields_have_no_confidence(self):
        suggestion = suggest_columns(["Date", "Open", "High", "Low", "Close"])

        assert "volume" not in suggestion.confidence
