"""Recover JSON objects and tool invocations embedded in model output.

Models frequently wrap structured output in prose or Markdown fences. The
helpers here try a fixed sequence of strategies, cheapest and most literal
first:

1. the whole text as JSON
2. the first fenced block tagged ``json``
3. the first fenced block of any kind
4. the first flat ``{...}`` pair (no nested braces)

The order is part of the contract. A text that is valid JSON by itself is
never searched for fences, and the brace scan intentionally does not try to
balance nested objects.

None of the extraction helpers raise; they log a warning and return ``None``.
:func:`process_function_call` is the exception: it raises
:class:`~utils.errors.InvalidFunctionCallError` for calls without a name.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from providers.shared import FunctionCall, utc_timestamp

from .errors import InvalidFunctionCallError

logger = logging.getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)
_ANY_FENCE_RE = re.compile(r"```\s*(.*?)\s*```", re.DOTALL)
_FLAT_OBJECT_RE = re.compile(r"\{[^{}]*\}")
_CALL_TOOL_RE = re.compile(r"""call_tool\(\s*['"]([^'"]+)['"]\s*,\s*(\{[^}]*\})\s*\)""")


@dataclass(frozen=True)
class ProcessedFunctionCall:
    """Function call with decoded parameters, ready for tool dispatch."""

    tool_name: str
    parameters: Any = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {"toolName": self.tool_name, "parameters": self.parameters, "timestamp": self.timestamp}


def extract_json(text: str) -> Optional[Any]:
    """Return the first JSON value recoverable from ``text`` or ``None``."""

    if not isinstance(text, str):
        logger.warning("Failed to extract JSON from response: expected str, got %s", type(text).__name__)
        return None

    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        pass

    try:
        match = _JSON_FENCE_RE.search(text)
        if match and match.group(1):
            return json.loads(match.group(1))

        match = _ANY_FENCE_RE.search(text)
        if match and match.group(1):
            try:
                return json.loads(match.group(1))
            except (ValueError, RecursionError):
                pass

        match = _FLAT_OBJECT_RE.search(text)
        if match:
            return json.loads(match.group(0))
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to extract JSON from response: %s", exc)
        return None

    return None


def extract_tool_call(text: str) -> Optional[dict[str, Any]]:
    """Find a tool invocation in model output.

    Structured JSON is preferred: a ``tool_call`` object (or ``function_call``
    when there is no ``tool_call``), then a bare ``{"name": ..., "parameters"
    | "arguments": ...}`` object. Failing that, a textual
    ``call_tool('name', {...})`` is recognised.

    Returns:
        ``{"name": str, "arguments": dict}`` or ``None``.
    """

    payload = extract_json(text)
    if isinstance(payload, Mapping):
        for key in ("tool_call", "function_call"):
            embedded = payload.get(key)
            if isinstance(embedded, Mapping):
                call = dict(embedded)
                call["arguments"] = _decode_arguments(call.get("arguments"))
                return call

        name = payload.get("name")
        arguments = next(
            (value for value in (payload.get("parameters"), payload.get("arguments")) if _is_present(value)), None
        )
        if name and arguments is not None:
            return {"name": name, "arguments": _decode_arguments(arguments)}

    if not isinstance(text, str):
        return None

    match = _CALL_TOOL_RE.search(text)
    if match:
        try:
            return {"name": match.group(1), "arguments": json.loads(match.group(2))}
        except (ValueError, RecursionError) as exc:
            logger.warning("Failed to parse tool call arguments: %s", exc)

    return None


def process_function_call(function_call: Union[Mapping[str, Any], FunctionCall, None]) -> ProcessedFunctionCall:
    """Decode a provider function call into a tool name and parameter object.

    String arguments are parsed as JSON; undecodable strings become ``{}``
    rather than failing the request.

    Raises:
        InvalidFunctionCallError: If ``function_call`` is missing or has no name.
    """

    if isinstance(function_call, FunctionCall):
        function_call = function_call.to_dict()

    if not isinstance(function_call, Mapping) or not function_call.get("name"):
        logger.error("Failed to process function call: %r", function_call)
        raise InvalidFunctionCallError()

    args = function_call.get("arguments") or {}
    if isinstance(args, str):
        try:
            args = json.loads(args)
        except (ValueError, RecursionError) as exc:
            logger.warning("Failed to parse function call arguments: %s", exc)
            args = {}

    return ProcessedFunctionCall(tool_name=function_call["name"], parameters=args, timestamp=utc_timestamp())


def _decode_arguments(arguments: Any) -> Any:
    if arguments is None:
        return {}
    if isinstance(arguments, str):
        try:
            return json.loads(arguments)
        except (ValueError, RecursionError) as exc:
            logger.warning("Failed to parse tool call arguments: %s", exc)
            return {}
    return arguments


def _is_present(value: Any) -> bool:
    """Truthiness where empty containers still count as supplied arguments."""

    if isinstance(value, (Mapping, list)):
        return True
    return bool(value)
