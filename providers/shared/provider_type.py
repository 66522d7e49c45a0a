"""Enumeration describing which backend owns a given response shape."""

from enum import Enum
from typing import Optional

__all__ = ["ProviderType"]


class ProviderType(Enum):
    """Canonical identifiers for every supported response shape."""

    OPENAI = "openai"
    AZURE_OPENAI = "azure-openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    MISTRAL = "mistral"
    LOCAL = "local"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["ProviderType"]:
        """Map a caller-supplied provider token onto a ``ProviderType``.

        Matching is case-insensitive and accepts the vendor aliases callers
        commonly use (``claude`` for Anthropic, ``gemini`` for Google).
        Returns ``None`` for anything unrecognised.
        """

        if not isinstance(token, str):
            return None
        return _TOKEN_MAP.get(token.lower())


_TOKEN_MAP: dict[str, ProviderType] = {
    "openai": ProviderType.OPENAI,
    "azure-openai": ProviderType.AZURE_OPENAI,
    "claude": ProviderType.ANTHROPIC,
    "anthropic": ProviderType.ANTHROPIC,
    "gemini": ProviderType.GOOGLE,
    "google": ProviderType.GOOGLE,
    "mistral": ProviderType.MISTRAL,
    "local": ProviderType.LOCAL,
}
