"""Parser registry and provider dispatch for raw model responses."""

from __future__ import annotations

import logging
from typing import Any

from providers.shared import ProviderType

from .anthropic import ClaudeParser
from .base import BaseParser, ParseResult, ParserError
from .gemini import GeminiParser
from .local import LocalModelParser
from .mistral import MistralParser
from .openai import AzureOpenAIParser, OpenAIParser

logger = logging.getLogger(__name__)

_PARSER_CLASSES: dict[ProviderType, type[BaseParser]] = {
    ProviderType.OPENAI: OpenAIParser,
    ProviderType.AZURE_OPENAI: AzureOpenAIParser,
    ProviderType.ANTHROPIC: ClaudeParser,
    ProviderType.GOOGLE: GeminiParser,
    ProviderType.MISTRAL: MistralParser,
    ProviderType.LOCAL: LocalModelParser,
}

DEFAULT_PROVIDER = ProviderType.LOCAL


def get_parser(provider: ProviderType) -> BaseParser:
    if provider not in _PARSER_CLASSES:
        raise ParserError(f"No parser registered for '{provider}'")
    return _PARSER_CLASSES[provider]()


def parse_by_model_type(model_type: str, response: Any) -> ParseResult:
    """Normalise ``response`` using the parser for ``model_type``.

    ``model_type`` is matched case-insensitively against the provider tokens
    understood by :meth:`ProviderType.from_token`. Unknown tokens are not an
    error: they are logged and routed to the local/custom parser.

    Returns:
        A :class:`CanonicalResponse` on success or a :class:`CanonicalError`
        describing why the payload could not be parsed. Never raises.
    """

    provider = ProviderType.from_token(model_type)
    if provider is None:
        logger.warning("Unknown model type: %s, using default parser", model_type)
        provider = DEFAULT_PROVIDER
    return get_parser(provider).normalize(response)


__all__ = [
    "AzureOpenAIParser",
    "BaseParser",
    "ClaudeParser",
    "GeminiParser",
    "LocalModelParser",
    "MistralParser",
    "OpenAIParser",
    "ParseResult",
    "ParserError",
    "get_parser",
    "parse_by_model_type",
]
