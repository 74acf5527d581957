"""CSV decoding into header-keyed raw rows."""

import logging
from io import StringIO
from pathlib import Path
from typing import TextIO, Union

import pandas as pd

from candleview.errors import CSVReadError

logger = logging.getLogger(__name__)

CSVSource = Union[str, Path, TextIO]


def read_rows(source: CSVSource) -> list[dict[str, str]]:
    """Read a CSV file into a list of raw rows.

    The first line is the header. Every cell is kept as text (no type or NA
    inference), header names are trimmed and blank lines are skipped.
    A trailing delimiter at the end of a data line does not shift the
    cells; the first column is never promoted to an index.

    Args:
        source: Path to a CSV file or an open text buffer.

    Returns:
        One dict per data line, mapping header to cell text.

    Raises:
        CSVReadError: If the file cannot be read or decoded as CSV.
    """
    try:
        frame = pd.read_csv(
            source,
            dtype=str,
            index_col=False,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise CSVReadError(f"Could not parse CSV: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]
    rows = frame.to_dict(orient="records")
    logger.debug("Read %d rows with headers %s", len(rows), list(frame.columns))
    return rows


def read_rows_from_text(text: str) -> list[dict[str, str]]:
    """Read raw rows from CSV text already in memory."""
    return read_rows(StringIO(text))
