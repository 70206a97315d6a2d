"""
Delimited-text parser for published sheet exports.

Handles CSV exports whose delimiter and header position are unknown up
front. The sheet owners put a title block above the real header, leave
spacing rows, and sometimes export from a locale that uses semicolons.

Input structure:
  - Optional BOM.
  - Zero or more preamble rows (titles, notes), any width.
  - Header row: cell 1 reads ``Zip`` (e.g. ``State,Zip,County,City``).
  - Data rows, possibly ragged, possibly separated by blank rows.

Output:
  - ParseResult with one flat ``dict[str, str]`` record per data row.

Steps:
  1. Strip BOM, detect delimiter from the first line (detect.py).
  2. Tokenize everything with the stdlib csv reader in strict mode. The
     whole table is tokenized before any record is built, so a decode
     error never yields partial output.
  3. Drop blank rows (transforms/empty.py).
  4. Locate the header (detect.py), build records (transforms/keys.py).
  5. Strip reserved keys.
"""

from __future__ import annotations

import csv
import io
import logging

from gkc_ingest.config import ParseConfig
from gkc_ingest.detect import detect_delimiter, find_header, strip_bom
from gkc_ingest.exceptions import DecodeError
from gkc_ingest.parsers.base import BaseParser, ParseResult
from gkc_ingest.transforms.empty import drop_blank_rows
from gkc_ingest.transforms.keys import Record, build_record, drop_reserved_keys

logger = logging.getLogger(__name__)

# Sheet cells can exceed the stdlib default of 131072 characters.
# 2**31 - 1 fits a C long on every platform.
csv.field_size_limit(2**31 - 1)


def _tokenize(text: str, delimiter: str) -> list[list[str]]:
    """Split *text* into rows of cells; rows may differ in length."""
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    try:
        return list(reader)
    except csv.Error as exc:
        raise DecodeError(
            f"Could not tokenize table with delimiter {delimiter!r} "
            f"(line {reader.line_num}): {exc}"
        ) from exc


class DelimitedParser(BaseParser):
    """Parser for comma/semicolon separated sheet exports."""

    def __init__(self, options: ParseConfig | None = None) -> None:
        self.options = options or ParseConfig()

    def parse(self, raw_text: str) -> ParseResult:
        opts = self.options
        text = strip_bom(raw_text)
        delimiter = detect_delimiter(text, opts.delimiters)

        rows = _tokenize(text, delimiter)
        dropped = drop_blank_rows(rows)
        logger.info(
            "Tokenized %d rows (%d blank rows dropped)",
            dropped.rows_total,
            dropped.rows_dropped,
        )

        header_idx = find_header(dropped.rows, opts.header_sentinel, opts.sentinel_column)
        if header_idx is None:
            logger.warning(
                "No header row with %r in column %d; returning no records",
                opts.header_sentinel,
                opts.sentinel_column,
            )
            return ParseResult(
                status="no_header",
                delimiter=delimiter,
                rows_dropped=dropped.rows_dropped,
            )

        header = dropped.rows[header_idx]
        records = [
            build_record(header, row, opts.placeholder_prefix)
            for row in dropped.rows[header_idx + 1:]
        ]
        records = drop_reserved_keys(records, opts.reserved_keys)
        logger.info("Built %d records (%d preamble rows skipped)", len(records), header_idx)

        return ParseResult(
            status="records",
            delimiter=delimiter,
            header=header,
            records=records,
            rows_dropped=dropped.rows_dropped,
        )


def parse_table(raw_text: str, options: ParseConfig | None = None) -> ParseResult:
    """Parse *raw_text* with a DelimitedParser and return the tagged result."""
    return DelimitedParser(options).parse(raw_text)


def normalize(raw_text: str, options: ParseConfig | None = None) -> list[Record]:
    """Turn raw delimited text into records.

    Returns an empty list when no header row is found.

    Raises:
        DecodeError: If the text cannot be tokenized.
    """
    return parse_table(raw_text, options).records
