"""
Snapshot storage backends for gkc-ingest.

The cache gateway needs three things from storage: whether a snapshot
exists and when it was last written, its bytes, and a way to replace it.
Freshness comes from the storage's own write time; the JSON payload
carries no timestamp.

Backends:
- FileSnapshotStorage: a single file; last-write time is the file mtime.
- MemorySnapshotStorage: bytes held in memory with an injected clock.
  Used by tests and by callers that do not want a file on disk.

Neither backend coordinates writers: the last write wins.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from gkc_ingest.exceptions import StorageError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SnapshotMetadata:
    """Whether a snapshot exists and when it was last written."""
    exists: bool
    last_write_time: datetime | None = None


class SnapshotStorage(Protocol):
    """Durable single-slot store for the serialized snapshot."""

    def read_metadata(self) -> SnapshotMetadata:  # pragma: no cover - structural contract
        ...

    def read_bytes(self) -> bytes:  # pragma: no cover - structural contract
        ...

    def write_bytes(self, data: bytes) -> None:  # pragma: no cover - structural contract
        ...


class FileSnapshotStorage:
    """Store the snapshot as one file on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileSnapshotStorage(path={str(self.path)!r})"

    def read_metadata(self) -> SnapshotMetadata:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return SnapshotMetadata(exists=False)
        except OSError as exc:
            raise StorageError(f"Cannot stat snapshot {self.path}: {exc}") from exc
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        return SnapshotMetadata(exists=True, last_write_time=modified)

    def read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Cannot read snapshot {self.path}: {exc}") from exc

    def write_bytes(self, data: bytes) -> None:
        """Replace the snapshot file.

        The payload goes to a temporary sibling first and is then renamed
        over the target, so readers never see a half-written file.
        """
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write snapshot {self.path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), self.path)


class MemorySnapshotStorage:
    """Keep the snapshot in memory, stamped by *clock* on each write."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or utc_now
        self._state: tuple[bytes, datetime] | None = None
        self.writes = 0

    def read_metadata(self) -> SnapshotMetadata:
        state = self._state
        if state is None:
            return SnapshotMetadata(exists=False)
        return SnapshotMetadata(exists=True, last_write_time=state[1])

    def read_bytes(self) -> bytes:
        state = self._state
        if state is None:
            raise StorageError("No snapshot has been written")
        return state[0]

    def write_bytes(self, data: bytes) -> None:
        self._state = (bytes(data), self.clock())
        self.writes += 1
