"""
Column key resolution for gkc-ingest records.

Keys are assigned by position and driven by the data row, not the header:
a data row shorter than the header simply has fewer keys, and cells past
the end of the header get synthetic keys built from their index.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

Record = dict[str, str]


def resolve_column_name(header: Sequence[str], index: int, prefix: str = "column_") -> str:
    """Trimmed header cell at *index*, or ``{prefix}{index}`` if missing/blank."""
    if index < len(header):
        name = header[index].strip()
        if name:
            return name
    return f"{prefix}{index}"


def build_record(header: Sequence[str], row: Sequence[str], prefix: str = "column_") -> Record:
    """Map each cell of *row* to its column name, trimming values.

    A later cell overwrites an earlier one if two header cells share a name.
    """
    record: Record = {}
    for i, cell in enumerate(row):
        record[resolve_column_name(header, i, prefix)] = cell.strip()
    return record


def drop_reserved_keys(records: Iterable[Record], reserved: Iterable[str]) -> list[Record]:
    """Remove every reserved key from every record, in place.

    Returns the records as a list for convenience.
    """
    reserved = tuple(reserved)
    result: list[Record] = []
    for record in records:
        for key in reserved:
            record.pop(key, None)
        result.append(record)
    return result
