"""
Shared test fixtures and sample sheets for gkc-ingest tests.

All sample exports are defined here as module-level constants for easy
discovery. The fake fetcher and clock let cache tests run without network
access or real file timestamps.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from gkc_ingest.storage import MemorySnapshotStorage

# ---------------------------------------------------------------------------
# Sample exports -- shaped like the published ban sheet
# ---------------------------------------------------------------------------
SIMPLE_SHEET = "Title Row\nState,Zip,County\nKS,66101,Wyandotte\n"

BAN_SHEET = """\
Kratom Ban List,,,,
Last reviewed 2025-01-10,,,,
,,,,
Country,Zip,State,County,City
US,66101,KS,Wyandotte,Kansas City
US,35004,AL,St. Clair,Moody
,,,,
US,97201,OR,Multnomah,Portland
"""

SEMICOLON_SHEET = """\
Lista;;;
State;Zip;County;City
KS;66101;Wyandotte;Kansas City
"""

NO_HEADER_SHEET = """\
State,Postal,County
KS,66101,Wyandotte
"""

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
URL = "https://example.test/export?format=csv"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------
class FakeClock:
    """Manually advanced clock returning aware datetimes."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeFetcher:
    """Returns canned text (or raises) and counts calls."""

    def __init__(self, text: str = SIMPLE_SHEET, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str) -> str:
        with self._lock:
            self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def memory_storage(clock: FakeClock) -> MemorySnapshotStorage:
    return MemorySnapshotStorage(clock=clock)


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (exercises several modules together)",
    )
