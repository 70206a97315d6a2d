"""
Time-to-live cache gateway for gkc-ingest.

``CacheGateway`` is the only thing the HTTP layer talks to. It wraps the
fetcher, the parser and the snapshot storage, and decides per call
whether to serve the persisted snapshot or to refetch.

State per call:
- FRESH: a snapshot exists and ``0 <= now - last_write < ttl``. The
  snapshot JSON is returned as stored, without re-validation.
- STALE-OR-ABSENT: anything else. The export is fetched, parsed,
  serialized and written over the snapshot, and the fresh records are
  returned. Every miss is a full refetch-and-replace.

Failure policy:
- Storage read failures (metadata, bytes or JSON) degrade to a miss.
- Storage write failures are logged; the caller still gets the records
  and the next call refetches.
- Fetch and decode failures propagate. A stale snapshot is never served
  as a fallback.

Concurrency:
  There is no lock and no in-flight deduplication. Concurrent misses each
  fetch and each overwrite the snapshot; the last writer wins. Callers
  (e.g. FastAPI's thread pool) may invoke ``get_current()`` freely.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any

import pandas as pd

from gkc_ingest.config import IngestConfig
from gkc_ingest.exceptions import StorageError
from gkc_ingest.export import records_to_frame
from gkc_ingest.fetch import Fetcher, HttpFetcher
from gkc_ingest.parsers.base import BaseParser
from gkc_ingest.parsers.delimited import DelimitedParser
from gkc_ingest.storage import Clock, FileSnapshotStorage, SnapshotStorage, utc_now
from gkc_ingest.transforms.keys import Record

logger = logging.getLogger(__name__)


def dump_snapshot(records: list[Record]) -> bytes:
    """Serialize records as pretty-printed UTF-8 JSON."""
    return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")


def load_snapshot(data: bytes) -> Any:
    """Deserialize a snapshot payload; no shape checks are applied."""
    return json.loads(data.decode("utf-8"))


class CacheGateway:
    """Serve records from a persisted snapshot, refetching once it expires.

    Attributes:
        fetcher: Retrieves the raw export text for ``url``.
        storage: Holds the serialized snapshot and its last-write time.
        url: Export URL, passed to the fetcher verbatim.
        ttl: Maximum snapshot age that is still served.
        parser: Turns raw text into records.
        clock: Returns the current aware ``datetime``.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        storage: SnapshotStorage,
        url: str,
        ttl: timedelta,
        parser: BaseParser | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.storage = storage
        self.url = url
        self.ttl = ttl
        self.parser = parser or DelimitedParser()
        self.clock = clock or utc_now

    @classmethod
    def from_config(cls, config: IngestConfig) -> CacheGateway:
        """Wire an HTTP fetcher and a file-backed snapshot from *config*."""
        return cls(
            fetcher=HttpFetcher.from_config(config.source),
            storage=FileSnapshotStorage(config.cache.path),
            url=config.source.url,
            ttl=config.cache.ttl,
            parser=DelimitedParser(config.parse),
        )

    def __repr__(self) -> str:
        return f"CacheGateway(url={self.url!r}, ttl={self.ttl}, storage={self.storage!r})"

    # -- Public API ---------------------------------------------------------

    def get_current(self) -> list[Record]:
        """Return the current records, from the snapshot if it is fresh.

        Raises:
            FetchError: If the snapshot is not fresh and the fetch fails.
            DecodeError: If the fetched text cannot be tokenized.
        """
        records = self._read_fresh()
        if records is not None:
            return records
        return self.refresh()

    def refresh(self) -> list[Record]:
        """Fetch, parse and persist unconditionally; return the new records."""
        logger.info("Fetching fresh data from %s", self.url)
        raw_text = self.fetcher.fetch(self.url)
        result = self.parser.parse(raw_text)

        try:
            self.storage.write_bytes(dump_snapshot(result.records))
        except StorageError as exc:
            logger.warning("Could not persist snapshot, serving unsaved records: %s", exc)
        else:
            logger.info("Saved %d records to snapshot", len(result.records))
        return result.records

    def snapshot_age(self) -> timedelta | None:
        """Age of the persisted snapshot, or ``None`` if there is none."""
        meta = self.storage.read_metadata()
        if not meta.exists or meta.last_write_time is None:
            return None
        return self.clock() - meta.last_write_time

    def load_frame(self) -> pd.DataFrame:
        """Current records as a DataFrame (see ``export.records_to_frame``)."""
        return records_to_frame(self.get_current())

    # -- Internals ----------------------------------------------------------

    def _read_fresh(self) -> list[Record] | None:
        """Return the snapshot if it is fresh and readable, else ``None``."""
        try:
            age = self.snapshot_age()
        except StorageError as exc:
            logger.warning("Snapshot metadata unreadable, treating as absent: %s", exc)
            return None

        if age is None:
            logger.info("No snapshot found")
            return None
        if age < timedelta(0) or age >= self.ttl:
            logger.info("Snapshot is stale (age: %s, ttl: %s)", age, self.ttl)
            return None

        try:
            records = load_snapshot(self.storage.read_bytes())
        except (StorageError, ValueError) as exc:
            logger.warning("Snapshot unreadable, refetching: %s", exc)
            return None

        logger.info("Using cached data (age: %s)", age)
        return records
