"""
Base parser protocol / ABC for gkc-ingest.

All table parsers must implement this interface. The contract is:
1. parse() takes the raw text of one fetched export and returns a ParseResult.
2. ParseResult is a tagged result: either records were produced under a
   located header row, or no header row was found. "No header" is a
   valid outcome, not an error.

Why an ABC:
- Enforces a consistent interface across parsers.
- Lets the cache gateway accept any parser that honors the contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal

from gkc_ingest.transforms.keys import Record

ParseStatus = Literal["records", "no_header"]


@dataclass
class ParseResult:
    """Standardized output from any parser.

    Attributes:
        status: ``"records"`` when a header row was located (the record
            list may still be empty if the header is the last row), or
            ``"no_header"`` when no row matched the sentinel.
        delimiter: The delimiter chosen for the whole table.
        header: The located header row, untrimmed, or ``None``.
        records: One record per non-blank data row after the header, in
            source order, with reserved keys already removed.
        rows_dropped: Number of blank rows skipped before header search.
    """
    status: ParseStatus
    delimiter: str
    header: list[str] | None = None
    records: list[Record] = field(default_factory=list)
    rows_dropped: int = 0

    @property
    def header_found(self) -> bool:
        return self.status == "records"


class BaseParser(ABC):
    """Abstract base class for sheet export parsers."""

    @abstractmethod
    def parse(self, raw_text: str) -> ParseResult:
        """Parse one fetched export.

        Args:
            raw_text: The decoded response body, possibly BOM-prefixed.

        Returns:
            ParseResult tagged with whether a header row was found.

        Raises:
            DecodeError: If the text cannot be tokenized.
        """
