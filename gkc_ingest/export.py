"""
Exporter for gkc-ingest.

Converts records to a pandas DataFrame and writes them to disk as CSV or
Parquet, for offline analysis of the ban list outside the dashboard.

Column layout:
  Records are schema-free, so the columns are the union of all record
  keys in first-seen order. Cells missing from a record become ``""``
  (records only ever hold strings).

CSV is written with ``utf-8-sig`` encoding (BOM) so Excel opens it with
the right encoding; Parquet goes through pyarrow.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

import pandas as pd

from gkc_ingest.exceptions import ExportError

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def records_to_frame(records: Sequence[dict[str, str]]) -> pd.DataFrame:
    """Build a string-typed DataFrame from records.

    Args:
        records: Flat ``{column: value}`` mappings, possibly with differing keys.

    Returns:
        DataFrame with one row per record and one column per distinct key.
    """
    columns: list[str] = []
    seen: set[str] = set()
    for record in records:
        for key in record:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    df = pd.DataFrame.from_records(list(records), columns=columns)
    return df.fillna("").astype(str)


def export_records(
    records: Sequence[dict[str, str]],
    path: str | Path,
    output_format: Literal["csv", "parquet"] | None = None,
) -> Path:
    """Write records to *path*.

    Args:
        records: Records to write.
        path: Output file; parent directories are created.
        output_format: ``"csv"`` or ``"parquet"``. Inferred from the file
            suffix when ``None``.

    Returns:
        The path that was written.

    Raises:
        ExportError: If the format is unsupported or the write fails.
    """
    path = Path(path)
    fmt = output_format or path.suffix.lstrip(".").lower()
    if fmt not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{fmt}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    df = records_to_frame(records)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "csv":
            df.to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name} as {fmt}: {exc}") from exc

    logger.info("Exported %d records -> %s (%d cols)", len(df), path, len(df.columns))
    return path
