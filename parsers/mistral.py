"""Parser for Mistral chat completion payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from providers.shared import (
    CanonicalResponse,
    FunctionCall,
    ProviderType,
    TokenStats,
    create_success_response,
)

from .base import BaseParser, ParserError, as_mapping, first_item


class MistralParser(BaseParser):
    """Parse Mistral's OpenAI-like ``choices`` payload."""

    provider = ProviderType.MISTRAL
    label = "Mistral"

    def parse(self, response: Any) -> CanonicalResponse:
        if not isinstance(response, Mapping):
            raise ParserError("Invalid Mistral response format")
        first_choice = first_item(response, "choices", "Invalid Mistral response format")

        message = as_mapping(first_choice.get("message"))
        raw_call = message.get("function_call")
        function_call = None
        if raw_call:
            call = as_mapping(raw_call)
            function_call = FunctionCall(name=call.get("name"), arguments=call.get("arguments"))

        usage = as_mapping(response.get("usage"))
        stats = TokenStats(
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
            total_tokens=usage.get("total_tokens") or 0,
        )

        return create_success_response(
            message.get("content") or "",
            is_function_call=bool(raw_call),
            function_call=function_call,
            model=response.get("model"),
            finish_reason=first_choice.get("finish_reason") or "unknown",
            stats=stats,
        )
