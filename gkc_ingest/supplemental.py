"""Pass-through loader for the supplemental info file (links, previews, tags)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gkc_ingest.exceptions import SupplementalError

logger = logging.getLogger(__name__)


def load_supplemental(path: str | Path) -> Any:
    """Read *path* and return its JSON content untouched.

    The file is maintained by hand next to the server; its structure is
    owned by the dashboard, so nothing beyond JSON syntax is checked.

    Raises:
        SupplementalError: If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SupplementalError(f"Error reading supplemental JSON file: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SupplementalError(f"Error parsing supplemental JSON: {exc}") from exc
    logger.debug("Loaded supplemental info from %s", path)
    return data
