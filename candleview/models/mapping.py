"""Column mapping models produced by header introspection."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("date", "open", "high", "low", "close")
MAPPING_FIELDS = REQUIRED_FIELDS + ("volume",)


class MatchConfidence(str, Enum):
    """How a header was assigned to a field."""

    WORD = "word"  # multi-letter candidate, or exact header match
    LETTER = "letter"  # bare single letter somewhere in the header
    MANUAL = "manual"


class ColumnMapping(BaseModel):
    """Which CSV header holds each OHLCV field. None means unset."""

    date: Optional[str] = Field(default=None, description="Date/time column")
    open: Optional[str] = Field(default=None, description="Open price column")
    high: Optional[str] = Field(default=None, description="High price column")
    low: Optional[str] = Field(default=None, description="Low price column")
    close: Optional[str] = Field(default=None, description="Close price column")
    volume: Optional[str] = Field(default=None, description="Volume column (optional)")

    model_config = {"frozen": True}

    @property
    def is_complete(self) -> bool:
        """True when every required field is mapped."""
        return not self.missing()

    def missing(self) -> list[str]:
        """Return the required fields that are still unset."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def with_overrides(self, **fields: Optional[str]) -> "ColumnMapping":
        """Return a copy with the given (non-None) manual selections applied."""
        updates = {k: v for k, v in fields.items() if v is not None}
        unknown = set(updates) - set(MAPPING_FIELDS)
        if unknown:
            raise ValueError(f"Unknown mapping fields: {', '.join(sorted(unknown))}")
        return self.model_copy(update=updates)


class ColumnSuggestion(BaseModel):
    """A best-effort mapping plus how confident each assignment is."""

    mapping: ColumnMapping = Field(default_factory=ColumnMapping)
    confidence: dict[str, MatchConfidence] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def needs_confirmation(self) -> bool:
        """True when any field was only matched on a bare letter."""
        return any(c is MatchConfidence.LETTER for c in self.confidence.values())

    @property
    def low_confidence_fields(self) -> list[str]:
        return [
            name for name in MAPPING_FIELDS
            if self.confidence.get(name) is MatchConfidence.LETTER
        ]

    def with_overrides(self, **fields: Optional[str]) -> "ColumnSuggestion":
        """Apply manual selections; overridden fields become MANUAL."""
        mapping = self.mapping.with_overrides(**fields)
        confidence = dict(self.confidence)
        for name, header in fields.items():
            if header is not None:
                confidence[name] = MatchConfidence.MANUAL
        return ColumnSuggestion(mapping=mapping, confidence=confidence)
