"""
Custom exception hierarchy for gkc-ingest.

Why a custom hierarchy:
- Callers can catch a specific failure kind (e.g., FetchError vs
  DecodeError) or everything at once via ``GkcIngestError``.
- The HTTP layer only needs to know about the base class, while logs and
  tests keep the precise failure kind.
"""


class GkcIngestError(Exception):
    """Base exception for all gkc-ingest errors."""


class FetchError(GkcIngestError):
    """Raised when the remote sheet export could not be retrieved.

    Covers connection errors, timeouts, and non-success HTTP status codes.
    Never retried by the cache gateway.
    """


class DecodeError(GkcIngestError):
    """Raised when the raw text cannot be tokenized under the chosen delimiter.

    Typically an unterminated or stray quote. Normalization is aborted as a
    whole; no partial records are returned.
    """


class StorageError(GkcIngestError):
    """Raised when the snapshot cannot be read from or written to storage.

    The cache gateway treats read failures as a cache miss and write
    failures as non-fatal, so this rarely reaches end users.
    """


class ConfigValidationError(GkcIngestError):
    """Raised when gkc.yaml fails validation.

    This can happen if:
    - The file is empty.
    - A delimiter candidate is not exactly one character.
    - The cache TTL is negative.
    """


class SupplementalError(GkcIngestError):
    """Raised when the supplemental JSON file is missing or not valid JSON."""


class ExportError(GkcIngestError):
    """Raised when records cannot be written to CSV/Parquet.

    For example, permission errors, disk full, or unsupported format.
    """
