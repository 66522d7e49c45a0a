"""Server-sent event framing for streamed replies."""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger(__name__)

_SPLIT_AFTER_WHITESPACE_RE = re.compile(r"(?<=\s)")


def format_stream_chunk(data: Any) -> str:
    """Frame ``data`` as one SSE event: ``data: <json>`` followed by a blank line.

    Returns an empty string when ``data`` cannot be serialised.
    """

    try:
        return f"data: {json.dumps(data, ensure_ascii=False)}\n\n"
    except (TypeError, ValueError) as exc:
        logger.error("Failed to format stream chunk: %s", exc)
        return ""


def iter_stream_chunks(text: str, model: str) -> Iterator[dict[str, Any]]:
    """Split a finished reply into word-sized stream chunks.

    Each chunk keeps its trailing whitespace so concatenating the ``content``
    fields reproduces ``text``. The final chunk carries ``isFinished=True``.
    """

    chunks = [chunk for chunk in _SPLIT_AFTER_WHITESPACE_RE.split(text or "") if chunk]
    for index, chunk in enumerate(chunks):
        yield {
            "id": f"stream-{time.time_ns()}",
            "content": chunk,
            "model": model,
            "isFinished": index == len(chunks) - 1,
        }
