"""Parser for OpenAI chat/completion payloads."""

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


class OpenAIParser(BaseParser):
    """Parse ``chat.completion`` and legacy ``text_completion`` responses."""

    provider = ProviderType.OPENAI
    label = "OpenAI"

    def parse(self, response: Any) -> CanonicalResponse:
        if not isinstance(response, Mapping):
            raise ParserError("Invalid OpenAI response format")
        first_choice = first_item(response, "choices", "Invalid OpenAI response format")

        content = ""
        is_function_call = False
        function_call = None

        message = first_choice.get("message")
        if message is not None:
            message = as_mapping(message)
            content = message.get("content") or ""

            raw_call = message.get("function_call")
            if raw_call:
                raw_call = as_mapping(raw_call)
                is_function_call = True
                function_call = FunctionCall(name=raw_call.get("name"), arguments=raw_call.get("arguments"))
        elif first_choice.get("text"):
            content = first_choice["text"]

        usage = as_mapping(response.get("usage"))
        stats = TokenStats(
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
            total_tokens=usage.get("total_tokens") or 0,
        )

        return create_success_response(
            content,
            is_function_call=is_function_call,
            function_call=function_call,
            model=response.get("model"),
            finish_reason=first_choice.get("finish_reason") or "unknown",
            stats=stats,
        )


class AzureOpenAIParser(OpenAIParser):
    """Azure OpenAI deployments return the OpenAI shape unchanged."""

    provider = ProviderType.AZURE_OPENAI
