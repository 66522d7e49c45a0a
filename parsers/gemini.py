"""Parser for Google Gemini ``generateContent`` payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from providers.shared import CanonicalResponse, ProviderType, TokenStats, create_success_response

from .base import BaseParser, ParserError, as_mapping, first_item


class GeminiParser(BaseParser):
    """Parse candidate-based responses from the Gemini API."""

    provider = ProviderType.GOOGLE
    label = "Gemini"

    def parse(self, response: Any) -> CanonicalResponse:
        if not isinstance(response, Mapping):
            raise ParserError("Invalid Gemini response format")
        first_candidate = first_item(response, "candidates", "Invalid Gemini response format")

        content = ""
        candidate_content = as_mapping(first_candidate.get("content"))
        parts = candidate_content.get("parts")
        if parts:
            content = "".join(self._part_text(part) for part in parts)

        usage = as_mapping(response.get("usageMetadata"))
        stats = TokenStats.from_parts(usage.get("promptTokenCount"), usage.get("candidatesTokenCount"))

        return create_success_response(
            content,
            model=response.get("model") or "gemini",
            finish_reason=first_candidate.get("finishReason") or "unknown",
            stats=stats,
        )

    @staticmethod
    def _part_text(part: Any) -> str:
        return as_mapping(part).get("text") or ""
