"""Shared data structures and helpers for provider responses."""

from .model_capabilities import ModelCapabilities
from .model_response import (
    CanonicalError,
    CanonicalResponse,
    FunctionCall,
    TokenStats,
    create_error_response,
    create_success_response,
    utc_timestamp,
)
from .provider_type import ProviderType

__all__ = [
    "CanonicalError",
    "CanonicalResponse",
    "FunctionCall",
    "ModelCapabilities",
    "ProviderType",
    "TokenStats",
    "create_error_response",
    "create_success_response",
    "utc_timestamp",
]
