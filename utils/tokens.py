"""Character-based token estimates for budgeting and display."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from providers.registries import get_model_info

from .errors import BadRequestError

logger = logging.getLogger(__name__)

# CJK ideographs plus Hiragana/Katakana; these tend to cost a full token each.
_WIDE_CHAR_RE = re.compile(r"[\u4e00-\u9fff\u3040-\u30ff]")


@dataclass(frozen=True)
class TokenEstimate:
    char_count: int
    estimated_tokens: int
    adjusted_tokens: int
    model: str
    calculation_method: str = "character-based-estimate"

    def to_dict(self) -> dict[str, Any]:
        return {
            "charCount": self.char_count,
            "estimatedTokens": self.estimated_tokens,
            "adjustedTokens": self.adjusted_tokens,
            "model": self.model,
            "calculationMethod": self.calculation_method,
        }


def estimate_tokens(text: str, model: str = "gpt-3.5-turbo") -> TokenEstimate:
    """Estimate token usage for ``text`` using the model's chars-per-token ratio.

    ``adjusted_tokens`` counts each CJK character twice to reflect that
    such characters rarely share a token.

    Raises:
        BadRequestError: If ``text`` is empty.
    """

    if not text:
        raise BadRequestError("Text is required")

    chars_per_token = get_model_info(model).chars_per_token
    char_count = len(text)
    wide_chars = len(_WIDE_CHAR_RE.findall(text))

    estimate = TokenEstimate(
        char_count=char_count,
        estimated_tokens=math.ceil(char_count / chars_per_token),
        adjusted_tokens=math.ceil((char_count + wide_chars) / chars_per_token),
        model=model,
    )
    logger.debug("Estimated %s tokens for model %s via character heuristic", estimate.estimated_tokens, model)
    return estimate
