"""Provider selection: normalise a raw payload given only the model name."""

from __future__ import annotations

import logging
from typing import Any

from parsers import ParseResult, parse_by_model_type

from .registries import get_model_info

logger = logging.getLogger(__name__)


def normalize_for_model(model_name: str, response: Any) -> ParseResult:
    """Look up ``model_name`` in the catalogue and parse with its provider's parser.

    Models missing from the catalogue fall back to the configured default
    provider (the local/custom parser unless overridden).
    """

    info = get_model_info(model_name)
    logger.debug("Normalising %s response for model %s", info.provider.value, model_name)
    return parse_by_model_type(info.provider.value, response)
