"""Provider identities, response envelopes and the model catalogue."""

from .registries import ModelCatalog, get_catalog, get_model_info
from .shared import (
    CanonicalError,
    CanonicalResponse,
    FunctionCall,
    ModelCapabilities,
    ProviderType,
    TokenStats,
)

__all__ = [
    "CanonicalError",
    "CanonicalResponse",
    "FunctionCall",
    "ModelCapabilities",
    "ModelCatalog",
    "ProviderType",
    "TokenStats",
    "get_catalog",
    "get_model_info",
]
