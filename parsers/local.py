"""Parser for local and custom model servers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from providers.shared import CanonicalResponse, ProviderType, TokenStats, create_success_response

from .base import BaseParser, ParserError

# First truthy field wins
CONTENT_FIELDS = ("text", "content", "message", "output")


class LocalModelParser(BaseParser):
    """Parse flat payloads from self-hosted models.

    Local servers disagree on where the generated text lives, so the parser
    probes :data:`CONTENT_FIELDS` in order. Token counts are read from the top
    level rather than a nested ``usage`` object.
    """

    provider = ProviderType.LOCAL
    label = "local model"

    def parse(self, response: Any) -> CanonicalResponse:
        if not isinstance(response, Mapping):
            raise ParserError("Invalid local model response format")

        content = ""
        for field_name in CONTENT_FIELDS:
            value = response.get(field_name)
            if value:
                content = value
                break

        return create_success_response(
            content,
            model=response.get("model") or "local-model",
            finish_reason=response.get("finish_reason") or "unknown",
            stats=TokenStats.from_parts(response.get("prompt_tokens"), response.get("completion_tokens")),
        )
