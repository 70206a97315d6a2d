"""
Configuration models and YAML I/O for gkc-ingest.

This module defines the Pydantic models that map 1:1 to gkc.yaml,
plus helper functions for loading, saving, and generating a default config.

Key models:
- IngestConfig: Top-level config (source + parse + cache + server).
- SourceConfig: Remote sheet export URL and HTTP settings.
- ParseConfig: Header sentinel, reserved keys, delimiter candidates.
- CacheConfig: Snapshot location and time-to-live.
- ServerConfig: Bind address and the pass-through files served over HTTP.

Key functions:
- load_config(path) -> IngestConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> IngestConfig: Build a config without a file.

Why Pydantic + YAML:
- Pydantic gives us strict validation, type coercion, and clear error messages.
- YAML is human-editable (the sheet URL and TTL are the usual edits).
- Round-trip fidelity: load -> modify -> save preserves structure.
"""

from __future__ import annotations

import codecs
import logging
from datetime import timedelta
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from gkc_ingest.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/18kCz2igidQVgqwLdpsDA15kYXLxqX99r"
    "/export?format=csv&gid=1370952005"
)

# 12 hours
DEFAULT_TTL_SECONDS = 12 * 60 * 60


class SourceConfig(BaseModel):
    """Where the delimited-text export is fetched from."""

    url: str = Field(DEFAULT_SHEET_URL, description="Sheet export URL, used verbatim")
    connect_timeout: float = Field(10.0, gt=0, description="Seconds to wait for a connection")
    read_timeout: float = Field(30.0, gt=0, description="Seconds to wait for the response body")
    encoding: str = Field("utf-8", description="Encoding used to decode the response body")

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown text encoding {value!r}.") from None
        return value


class ParseConfig(BaseModel):
    """Structure-sniffing constants for the parser.

    The defaults match the published ban sheet: the real header row is the
    first one whose second cell reads ``Zip``.
    """

    header_sentinel: str = Field("Zip", description="Label identifying the header row")
    sentinel_column: int = Field(1, ge=0, description="Cell index checked for the sentinel")
    reserved_keys: list[str] = Field(
        default_factory=lambda: ["Country", "column_0"],
        description="Keys always removed from every record",
    )
    delimiters: list[str] = Field(
        default_factory=lambda: [",", ";"],
        description="Delimiter candidates; earlier entries win ties",
    )
    placeholder_prefix: str = Field(
        "column_", description="Prefix for keys synthesized from a column index"
    )

    @field_validator("delimiters")
    @classmethod
    def _check_delimiters(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one delimiter candidate is required.")
        for delimiter in value:
            if len(delimiter) != 1:
                raise ValueError(
                    f"Delimiter candidates must be single characters, got {delimiter!r}."
                )
        if len(set(value)) != len(value):
            raise ValueError(f"Delimiter candidates must be unique, got {value}.")
        return value


class CacheConfig(BaseModel):
    """Snapshot persistence settings."""

    path: str = Field("data_cache.json", description="Snapshot file location")
    ttl_seconds: float = Field(
        DEFAULT_TTL_SECONDS, ge=0, description="Maximum snapshot age served without refetch"
    )

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)


class ServerConfig(BaseModel):
    """HTTP surface settings."""

    host: str = "127.0.0.1"
    port: int = Field(7001, ge=1, le=65535)
    supplemental_path: str = Field(
        "supplemental.json", description="JSON blob served verbatim at /supplemental"
    )
    index_path: str | None = Field(
        None, description="Optional dashboard HTML served at /"
    )


class IngestConfig(BaseModel):
    """Top-level configuration for gkc-ingest.

    Maps 1:1 to gkc.yaml. Every section has defaults, so an empty mapping
    is a valid config.
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    parse: ParseConfig = Field(default_factory=ParseConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_config(path: str | Path) -> IngestConfig:
    """Load and validate gkc.yaml into an IngestConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping at the top level: {path}"
        )
    logger.info("Loaded config from %s", path)
    return IngestConfig.model_validate(raw)


def save_config(config: IngestConfig, path: str | Path) -> None:
    """Serialize an IngestConfig to YAML.

    Writes a human-readable YAML file with a header comment.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# gkc-ingest configuration\n")
        f.write("# Edit this file to change the sheet URL, cache TTL, etc.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    url: str | None = None,
    cache_path: str | None = None,
    ttl_seconds: float | None = None,
) -> IngestConfig:
    """Build an IngestConfig without reading a file.

    Args:
        url: Sheet export URL. Defaults to the published ban sheet.
        cache_path: Where the snapshot is stored.
        ttl_seconds: Snapshot time-to-live.

    Returns:
        A fully populated IngestConfig.
    """
    config = IngestConfig()
    if url is not None:
        config.source.url = url
    if cache_path is not None:
        config.cache.path = cache_path
    if ttl_seconds is not None:
        config.cache = CacheConfig(path=config.cache.path, ttl_seconds=ttl_seconds)
    return config
