"""
Demo script: load the ban sheet through the cache via the public API.

Usage:
    uv run python scripts/run_ingest.py                         # serve from cache if fresh
    uv run python scripts/run_ingest.py --force                 # always refetch
    uv run python scripts/run_ingest.py --config=gkc.yaml       # use a config file
    uv run python scripts/run_ingest.py --export=out/bans.parquet
    uv run python scripts/run_ingest.py --serve                 # start the HTTP server

The first run fetches the sheet and writes the snapshot (data_cache.json
by default). Later runs within the TTL read the snapshot instead.
"""

from __future__ import annotations

import logging
import sys
from collections import Counter

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_ingest")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _option(name: str) -> str | None:
    """Return the value of a ``--name=value`` argument, if given."""
    prefix = f"--{name}="
    for arg in sys.argv[1:]:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import gkc_ingest
    from gkc_ingest.config import generate_default_config, load_config
    from gkc_ingest.export import export_records

    config_path = _option("config")
    export_path = _option("export")
    force = "--force" in sys.argv

    if "--serve" in sys.argv:
        from gkc_ingest.server import serve

        config = load_config(config_path) if config_path else generate_default_config()
        serve(config)
        return

    gw = gkc_ingest.open(config_path)
    log.info("Gateway: %r", gw)

    records = gw.refresh() if force else gw.get_current()
    log.info("Loaded %d records", len(records))

    by_state = Counter(r.get("State", "") for r in records)
    for state, count in sorted(by_state.items()):
        log.info("  %-4s %d", state or "?", count)

    if export_path:
        written = export_records(records, export_path)
        log.info("Exported to %s", written)

    log.info("Done.")


if __name__ == "__main__":
    main()
