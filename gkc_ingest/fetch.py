"""Fetchers that retrieve the raw sheet export over HTTP."""

from __future__ import annotations

import logging
from typing import Protocol

import requests

from gkc_ingest.config import SourceConfig
from gkc_ingest.exceptions import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "gkc-ingest/0.1"
PREVIEW_CHARS = 500


class Fetcher(Protocol):
    """Anything that can turn a URL into the raw export text."""

    def fetch(self, url: str) -> str:  # pragma: no cover - structural contract
        ...


class HttpFetcher:
    """Fetch a URL with a shared ``requests.Session``.

    No retries: a failed request raises ``FetchError`` immediately.
    """

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        encoding: str = "utf-8",
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = (connect_timeout, read_timeout)
        self.encoding = encoding
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    @classmethod
    def from_config(cls, source: SourceConfig) -> HttpFetcher:
        return cls(
            connect_timeout=source.connect_timeout,
            read_timeout=source.read_timeout,
            encoding=source.encoding,
        )

    def fetch(self, url: str) -> str:
        logger.info("Fetching %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

        text = response.content.decode(self.encoding, errors="replace")
        logger.debug("Raw response (first %d chars): %s", PREVIEW_CHARS, text[:PREVIEW_CHARS])
        return text
