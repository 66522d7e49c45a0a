"""File helpers shared by the JSON-backed registries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def read_json_file(file_path: str) -> Optional[Any]:
    """Read and parse a JSON file.

    Returns ``None`` when the file does not exist or is empty. Decoding errors
    propagate as :class:`json.JSONDecodeError` so callers can report the
    offending path.
    """

    path = Path(file_path)
    if not path.is_file():
        logger.debug("JSON file not found: %s", path)
        return None

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return None
    return json.loads(text)
