"""Parser interfaces for provider response payloads."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from providers.shared import (
    CanonicalError,
    CanonicalResponse,
    ProviderType,
    create_error_response,
)

logger = logging.getLogger(__name__)

ParseResult = Union[CanonicalResponse, CanonicalError]


class ParserError(RuntimeError):
    """Raised when a provider payload cannot be parsed into a canonical response."""


class BaseParser:
    """Base interface for provider response parsers.

    Subclasses implement :meth:`parse` and raise freely; :meth:`normalize` is
    the public entry point and converts every failure into a
    :class:`CanonicalError` so callers never see provider exceptions.
    """

    provider: ProviderType = ProviderType.LOCAL
    label: str = "base"

    def normalize(self, response: Any) -> ParseResult:
        try:
            return self.parse(coerce_payload(response))
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to parse %s response: %s", self.label, exc)
            return create_error_response(
                f"Failed to parse {self.label} response",
                500,
                {"originalError": str(exc)},
            )

    def parse(self, response: Any) -> CanonicalResponse:
        raise NotImplementedError("Parsers must implement parse()")


def coerce_payload(response: Any) -> Any:
    """Turn SDK response objects into plain dicts; leave everything else alone."""

    dump = getattr(response, "model_dump", None)
    if callable(dump) and not isinstance(response, Mapping):
        return dump()
    return response


def first_item(container: Mapping[str, Any], key: str, error_message: str) -> Mapping[str, Any]:
    """Return ``container[key][0]`` or raise ``ParserError`` when the list is missing or empty."""

    items = container.get(key)
    if not isinstance(items, list) or not items:
        raise ParserError(error_message)
    item = items[0]
    if not isinstance(item, Mapping):
        raise ParserError(error_message)
    return item


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Null-safe access helper: non-mappings behave like an empty object."""

    return value if isinstance(value, Mapping) else {}
