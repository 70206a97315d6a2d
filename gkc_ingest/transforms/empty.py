"""
Blank row dropper transform for gkc-ingest.

Removes rows where every cell is empty after trimming whitespace.

Why:
  Spreadsheet exports pad the grid with fully empty lines (spacing rows
  between sections, trailing rows below the data). They carry no data and
  must never be mistaken for preamble or records.

Returns:
  The remaining rows plus a count of dropped rows (logged by the parser).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass
class DropResult:
    """Result of the blank-row dropping step."""
    rows: list[list[str]]
    rows_total: int
    rows_dropped: int


def is_blank_row(row: Sequence[str]) -> bool:
    """A row is blank if it has no cells or every cell trims to ``""``."""
    return all(not cell.strip() for cell in row)


def drop_blank_rows(rows: Iterable[Sequence[str]]) -> DropResult:
    """Drop blank rows, keeping the order of the rest.

    Args:
        rows: Tokenized rows; may be ragged.

    Returns:
        DropResult with the kept rows and row counts.
    """
    kept: list[list[str]] = []
    total = 0
    for row in rows:
        total += 1
        if not is_blank_row(row):
            kept.append(list(row))
    return DropResult(rows=kept, rows_total=total, rows_dropped=total - len(kept))
