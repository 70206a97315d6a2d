"""
Structure detection for published sheet exports.

The export is not self-describing: it may use commas or semicolons
depending on the locale it was exported from, and the real header row is
preceded by an arbitrary number of title/preamble rows. Both are sniffed
from content.

Detection rules:
1. Delimiter: count each candidate in the first line only. A candidate
   wins only with a strictly higher count than every earlier candidate,
   so ties go to the first entry (comma by default). This is a one-shot
   heuristic; quoted delimiters in the first line are counted too.
2. Header: the first row whose cell at ``sentinel_column`` trims to the
   sentinel label (``Zip`` by default). Rows too short to have that cell
   can never be the header.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)

BOM = "\ufeff"

DEFAULT_DELIMITERS = (",", ";")


def strip_bom(text: str) -> str:
    """Remove leading byte-order-mark characters."""
    return text.lstrip(BOM)


def first_line(text: str) -> str:
    """Return the text up to (not including) the first newline."""
    return text.partition("\n")[0]


def detect_delimiter(text: str, candidates: Sequence[str] = DEFAULT_DELIMITERS) -> str:
    """Pick the delimiter for the whole table from its first line.

    Args:
        text: Raw table text, already BOM-stripped.
        candidates: Single-character delimiter candidates in priority order.

    Returns:
        The candidate with the highest count; the earliest one on ties.
    """
    if not candidates:
        raise ValueError("No delimiter candidates given.")
    line = first_line(text)
    best = candidates[0]
    best_count = line.count(best)
    for candidate in candidates[1:]:
        count = line.count(candidate)
        if count > best_count:
            best, best_count = candidate, count
    logger.info("Detected delimiter: %r", best)
    return best


def is_header_row(row: Sequence[str], sentinel: str = "Zip", column: int = 1) -> bool:
    """Whether *row* is the header: its cell at *column*, trimmed, equals *sentinel*."""
    return len(row) > column and row[column].strip() == sentinel


def find_header(
    rows: Sequence[Sequence[str]],
    sentinel: str = "Zip",
    column: int = 1,
) -> int | None:
    """Return the index of the first header row in *rows*, or ``None``."""
    for i, row in enumerate(rows):
        if is_header_row(row, sentinel, column):
            logger.info("Found header row at index %d: %s", i, list(row))
            return i
    return None
