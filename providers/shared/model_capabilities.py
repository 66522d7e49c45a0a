"""Dataclass describing a model entry in the gateway catalogue."""

from dataclasses import dataclass, field

from .provider_type import ProviderType

__all__ = ["ModelCapabilities"]


@dataclass
class ModelCapabilities:
    """Static description of a model known to the gateway.

    Role
        Acts as the canonical record for what the gateway needs to know about
        a model: which provider's response shape it returns, how large its
        context is, and how many characters make up a token on average.

    Typical usage
        * :class:`providers.registries.ModelCatalog` builds these from
          ``conf/models.json``
        * :func:`providers.normalizer.normalize_for_model` reads ``provider``
          to select the response parser
        * :func:`utils.tokens.estimate_tokens` reads ``chars_per_token`` for
          the character heuristic
    """

    provider: ProviderType
    model_name: str
    friendly_name: str = ""
    description: str = ""
    aliases: list[str] = field(default_factory=list)

    max_tokens: int = 8192
    chars_per_token: float = 4.0

