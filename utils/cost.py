"""API cost estimation from token usage."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

import config
from providers.registries import PricingEntry, RegistryLoadError
from providers.shared import TokenStats

from .env import get_env
from .file_utils import read_json_file

logger = logging.getLogger(__name__)

# USD per 1000 tokens. Declaration order matters: fuzzy lookup returns the
# first key contained in the requested model name.
DEFAULT_PRICING: dict[str, PricingEntry] = {
    "gpt-4": PricingEntry(prompt=0.03, completion=0.06),
    "gpt-4-vision-preview": PricingEntry(prompt=0.01, completion=0.03),
    "gpt-3.5-turbo": PricingEntry(prompt=0.0015, completion=0.002),
    "claude-3-opus-20240229": PricingEntry(prompt=0.015, completion=0.075),
    "claude-3-sonnet-20240229": PricingEntry(prompt=0.003, completion=0.015),
    "claude-3-haiku-20240307": PricingEntry(prompt=0.00025, completion=0.00125),
    "gemini-pro": PricingEntry(prompt=0.000125, completion=0.000375),
    "mistral-large-latest": PricingEntry(prompt=0.008, completion=0.024),
    "mistral-medium-latest": PricingEntry(prompt=0.002, completion=0.006),
    "mistral-small-latest": PricingEntry(prompt=0.0002, completion=0.0006),
}


@dataclass(frozen=True)
class CostEstimate:
    """Cost of one call, rounded to ``config.COST_PRECISION`` decimals."""

    model: str
    prompt_cost: float
    completion_cost: float
    total_cost: float
    currency: str = config.COST_CURRENCY

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "promptCost": self.prompt_cost,
            "completionCost": self.completion_cost,
            "totalCost": self.total_cost,
            "currency": self.currency,
        }


class PricingTable:
    """Ordered price table with exact, substring and fallback resolution."""

    def __init__(self, prices: Optional[Mapping[str, PricingEntry]] = None, config_path: Optional[str] = None):
        self._prices: dict[str, PricingEntry] = dict(DEFAULT_PRICING if prices is None else prices)
        path = config_path or get_env(config.MODEL_PRICING_ENV_VAR)
        if path:
            self._merge_file(Path(path).expanduser())

    def keys(self) -> list[str]:
        return list(self._prices.keys())

    def resolve(self, model: Optional[str]) -> tuple[str, PricingEntry]:
        """Return ``(price_key, entry)`` for ``model``.

        Lookup order: exact key, then the first declared key that is a
        substring of ``model``, then ``config.COST_FALLBACK_MODEL``.
        """

        name = model if isinstance(model, str) else ""
        if name in self._prices:
            return name, self._prices[name]

        key = next((candidate for candidate in self._prices if candidate in name), config.COST_FALLBACK_MODEL)
        entry = self._prices.get(key) or DEFAULT_PRICING[config.COST_FALLBACK_MODEL]
        return key, entry

    def _merge_file(self, path: Path) -> None:
        try:
            data = read_json_file(str(path))
        except json.JSONDecodeError as exc:
            raise RegistryLoadError(f"Invalid JSON in {path}: {exc}") from exc

        if not data:
            logger.debug("Pricing override %s is missing or empty", path)
            return
        if not isinstance(data, Mapping):
            raise RegistryLoadError(f"Pricing override {path} must be a JSON object of model -> price")

        for model_name, raw in data.items():
            if model_name.startswith("_"):
                continue
            try:
                entry = PricingEntry.model_validate(raw)
            except ValidationError as exc:
                raise RegistryLoadError(f"Invalid pricing for '{model_name}' in {path}: {exc}") from exc
            if model_name in self._prices:
                logger.info("Overriding price for '%s' from %s", model_name, path)
            self._prices[model_name] = entry


_PRICING: PricingTable | None = None


def get_pricing_table() -> PricingTable:
    global _PRICING
    if _PRICING is None:
        _PRICING = PricingTable()
    return _PRICING


def reset_pricing_table() -> None:
    global _PRICING
    _PRICING = None


def calculate_cost(
    usage: Union[Mapping[str, Any], TokenStats, None],
    model: Optional[str],
    *,
    table: Optional[PricingTable] = None,
) -> CostEstimate:
    """Estimate the USD cost of a call from its token usage.

    ``usage`` may be a ``TokenStats`` or a mapping with ``promptTokens`` /
    ``completionTokens``; missing counts are treated as zero. Never raises.
    """

    prompt_tokens, completion_tokens = _usage_counts(usage)
    key, price = (table or get_pricing_table()).resolve(model)

    prompt_cost = prompt_tokens * price.prompt / 1000
    completion_cost = completion_tokens * price.completion / 1000
    total_cost = prompt_cost + completion_cost

    return CostEstimate(
        model=key,
        prompt_cost=round(prompt_cost, config.COST_PRECISION),
        completion_cost=round(completion_cost, config.COST_PRECISION),
        total_cost=round(total_cost, config.COST_PRECISION),
    )


def _usage_counts(usage: Union[Mapping[str, Any], TokenStats, None]) -> tuple[float, float]:
    if isinstance(usage, TokenStats):
        return usage.prompt_tokens, usage.completion_tokens
    if isinstance(usage, Mapping):
        return _as_number(usage.get("promptTokens")), _as_number(usage.get("completionTokens"))
    return 0, 0


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value
