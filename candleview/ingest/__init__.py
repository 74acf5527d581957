"""CSV ingestion: cell cleansing, column detection and candle compilation."""

from candleview.ingest.columns import FIELD_CANDIDATES, detect_columns, suggest_columns
from candleview.ingest.compiler import CompileResult, compile_report, compile_rows
from candleview.ingest.normalize import normalize_number, parse_date_to_seconds
from candleview.ingest.reader import read_rows, read_rows_from_text

__all__ = [
    "FIELD_CANDIDATES",
    "CompileResult",
    "compile_report",
    "compile_rows",
    "detect_columns",
    "normalize_number",
    "parse_date_to_seconds",
    "read_rows",
    "read_rows_from_text",
    "suggest_columns",
]
