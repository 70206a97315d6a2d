"""
HTTP surface for the dashboard.

Endpoints:
- ``GET /data``: current records as a JSON array (via CacheGateway).
- ``GET /supplemental``: the supplemental JSON file, passed through.
- ``GET /``: the dashboard page when ``server.index_path`` is set.
- ``GET /health``: liveness probe.

Handlers are plain ``def`` functions, so FastAPI runs each request in its
thread pool and concurrent requests reach the gateway independently.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from gkc_ingest.cache import CacheGateway
from gkc_ingest.config import IngestConfig
from gkc_ingest.exceptions import GkcIngestError, SupplementalError
from gkc_ingest.supplemental import load_supplemental

logger = logging.getLogger(__name__)


def create_app(config: IngestConfig, gateway: CacheGateway | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        config: Loaded configuration.
        gateway: Pre-built gateway; built from *config* when ``None``.
    """
    gateway = gateway or CacheGateway.from_config(config)
    app = FastAPI(title="GKC Data Dashboard")
    app.state.gateway = gateway
    app.state.config = config

    @app.get("/data")
    def data():
        try:
            records = gateway.get_current()
        except GkcIngestError as exc:
            logger.error("Failed to load data: %s", exc)
            return PlainTextResponse(f"Error: {exc}", status_code=500)
        return JSONResponse(records)

    @app.get("/supplemental")
    def supplemental():
        try:
            blob = load_supplemental(config.server.supplemental_path)
        except SupplementalError as exc:
            logger.error("%s", exc)
            return PlainTextResponse(str(exc), status_code=500)
        return JSONResponse(blob)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def index():
        index_path = config.server.index_path
        if index_path and Path(index_path).is_file():
            return FileResponse(index_path, media_type="text/html")
        return {"message": "gkc-ingest api", "endpoints": ["/data", "/supplemental"]}

    return app


def serve(config: IngestConfig) -> None:
    """Run the app with uvicorn on ``server.host:server.port``."""
    import uvicorn

    logger.info("Starting server at http://%s:%d/", config.server.host, config.server.port)
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)
