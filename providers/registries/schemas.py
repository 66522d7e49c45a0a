"""Pydantic models for the JSON manifests under ``conf/``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, NonNegativeFloat, PositiveFloat, PositiveInt, field_validator

from ..shared import ProviderType


class ModelCatalogEntry(BaseModel):
    """Single model definition loaded from ``conf/models.json``."""

    model_name: str = Field(..., min_length=1)
    provider: ProviderType
    friendly_name: str | None = None
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    max_tokens: PositiveInt = 8192
    chars_per_token: PositiveFloat = 4.0

    @field_validator("provider", mode="before")
    @classmethod
    def _coerce_provider(cls, value: Any) -> ProviderType:
        if isinstance(value, ProviderType):
            return value
        provider = ProviderType.from_token(value) if isinstance(value, str) else None
        if provider is None:
            raise ValueError(f"Unknown provider '{value}'")
        return provider

    @field_validator("aliases", mode="before")
    @classmethod
    def _ensure_alias_list(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [alias.strip() for alias in value.split(",") if alias.strip()]
        if isinstance(value, list):
            return [str(item) for item in value]
        raise ValueError("aliases must be a list of strings or a comma separated string")


class PricingEntry(BaseModel):
    """Per-1K-token price for one model, in USD."""

    prompt: NonNegativeFloat
    completion: NonNegativeFloat
