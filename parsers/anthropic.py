"""Parser for Anthropic (Claude) completion payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from providers.shared import CanonicalResponse, ProviderType, TokenStats, create_success_response

from .base import BaseParser, ParserError, as_mapping


class ClaudeParser(BaseParser):
    """Parse the ``completion`` shape emitted by Anthropic's text completion API."""

    provider = ProviderType.ANTHROPIC
    label = "Claude"

    def parse(self, response: Any) -> CanonicalResponse:
        if not isinstance(response, Mapping) or not response.get("completion"):
            raise ParserError("Invalid Claude response format")

        usage = as_mapping(response.get("usage"))
        stats = TokenStats.from_parts(usage.get("input_tokens"), usage.get("output_tokens"))

        return create_success_response(
            response["completion"],
            model=response.get("model") or "claude",
            finish_reason=response.get("stop_reason") or "unknown",
            stats=stats,
        )
