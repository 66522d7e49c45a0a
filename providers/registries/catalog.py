"""Registry loader for the gateway's model catalogue."""

from __future__ import annotations

import logging

import config

from ..shared import ModelCapabilities, ProviderType
from .base import ManifestRegistry

logger = logging.getLogger(__name__)


class ModelCatalog(ManifestRegistry):
    """Capability registry backed by ``conf/models.json``."""

    def __init__(self, config_path: str | None = None) -> None:
        super().__init__(
            env_var_name=config.MODEL_CATALOG_ENV_VAR,
            default_filename="models.json",
            config_path=config_path,
        )
        self.reload()

    def get_model_info(self, model_name: str) -> ModelCapabilities:
        """Return catalogue metadata, or a default entry for unknown models.

        Unknown models are treated as custom deployments served through the
        default provider with ``DEFAULT_MAX_TOKENS`` of context.
        """

        capabilities = self.resolve(model_name)
        if capabilities is not None:
            return capabilities

        provider = ProviderType.from_token(config.DEFAULT_PROVIDER) or ProviderType.LOCAL
        logger.debug("Model %r not in catalogue; defaulting to provider %s", model_name, provider.value)
        return ModelCapabilities(
            provider=provider,
            model_name=model_name or "",
            friendly_name=model_name or "",
            max_tokens=config.DEFAULT_MAX_TOKENS,
            chars_per_token=config.DEFAULT_CHARS_PER_TOKEN,
        )


_CATALOG: ModelCatalog | None = None


def get_catalog() -> ModelCatalog:
    global _CATALOG
    if _CATALOG is None:
        _CATALOG = ModelCatalog()
    return _CATALOG


def reset_catalog() -> None:
    """Drop the cached catalogue so the next lookup re-reads configuration."""

    global _CATALOG
    _CATALOG = None


def get_model_info(model_name: str) -> ModelCapabilities:
    return get_catalog().get_model_info(model_name)
