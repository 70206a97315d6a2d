"""
gkc-ingest: fetch, normalize and cache a published ban/location sheet.

Public API surface:

- ``open(config_path=None)`` -- **recommended entry point**. Loads
  ``gkc.yaml`` (or uses defaults) and returns a ``CacheGateway`` whose
  ``get_current()`` serves the records, refetching once the snapshot is
  older than the configured TTL.

- ``normalize(raw_text)`` -- Pure function: raw delimited text to a list
  of ``{column: value}`` records. Empty when no header row is found.

- ``parse_table(raw_text)`` -- Same as ``normalize`` but returns the
  tagged ``ParseResult`` (status, delimiter, header, records).
"""

from __future__ import annotations

import logging
from pathlib import Path

from gkc_ingest.cache import CacheGateway
from gkc_ingest.config import IngestConfig, generate_default_config, load_config
from gkc_ingest.parsers.base import ParseResult
from gkc_ingest.parsers.delimited import normalize, parse_table

__all__ = ["open", "normalize", "parse_table", "CacheGateway", "IngestConfig", "ParseResult"]

logger = logging.getLogger(__name__)


def open(config_path: str | Path | None = None) -> CacheGateway:
    """Build a CacheGateway from a config file, or from defaults.

    Args:
        config_path: Path to ``gkc.yaml``. When ``None``, the default
            configuration is used (published sheet URL, ``data_cache.json``,
            12 hour TTL).

    Returns:
        A ``CacheGateway`` wired with an HTTP fetcher and a file snapshot.

    Examples::

        gw = gkc_ingest.open("gkc.yaml")
        records = gw.get_current()      # fetches on first call
        records = gw.get_current()      # served from data_cache.json
        df = gw.load_frame()
    """
    if config_path is None:
        logger.info("open() -- using default config")
        config = generate_default_config()
    else:
        logger.info("open() -- loading config from %s", config_path)
        config = load_config(config_path)
    return CacheGateway.from_config(config)
