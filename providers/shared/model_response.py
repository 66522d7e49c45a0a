"""Dataclasses used to normalise provider responses into one envelope."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

__all__ = [
    "CanonicalError",
    "CanonicalResponse",
    "FunctionCall",
    "TokenStats",
    "create_error_response",
    "create_success_response",
    "utc_timestamp",
]

SUCCESS_MESSAGE = "Operation successful"


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class TokenStats:
    """Token accounting reported (or derived) for a single completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_parts(cls, prompt_tokens: Any, completion_tokens: Any) -> "TokenStats":
        """Build stats for providers that only report the two parts."""

        prompt = prompt_tokens or 0
        completion = completion_tokens or 0
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)

    def to_dict(self) -> dict[str, int]:
        return {
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
        }


@dataclass(frozen=True)
class FunctionCall:
    """Structured function invocation signalled by a provider.

    ``arguments`` is kept exactly as the provider sent it; OpenAI delivers a
    JSON string which is only decoded by
    :func:`utils.extraction.process_function_call`.
    """

    name: Optional[str]
    arguments: Union[str, dict[str, Any], None] = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


@dataclass(frozen=True)
class CanonicalResponse:
    """Portable representation of a provider completion."""

    content: str = ""
    is_function_call: bool = False
    function_call: Optional[FunctionCall] = None
    model: Optional[str] = None
    finish_reason: str = "unknown"
    stats: TokenStats = field(default_factory=TokenStats)
    timestamp: str = field(default_factory=utc_timestamp)

    @property
    def error(self) -> bool:
        return False

    def data(self) -> dict[str, Any]:
        """Return the normalised payload using the gateway's JSON field names."""

        return {
            "content": self.content,
            "isFunctionCall": self.is_function_call,
            "functionCall": self.function_call.to_dict() if self.function_call else None,
            "model": self.model,
            "finishReason": self.finish_reason,
            "stats": self.stats.to_dict(),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": False,
            "message": SUCCESS_MESSAGE,
            "data": self.data(),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class CanonicalError:
    """Failure envelope returned in place of a raised provider exception."""

    message: str
    status_code: int = 500
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_timestamp)

    @property
    def error(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "message": self.message,
            "statusCode": self.status_code,
            "details": dict(self.details),
            "timestamp": self.timestamp,
        }


def create_success_response(
    content: str,
    *,
    is_function_call: bool = False,
    function_call: Optional[FunctionCall] = None,
    model: Optional[str] = None,
    finish_reason: str = "unknown",
    stats: Optional[TokenStats] = None,
) -> CanonicalResponse:
    """Wrap a parsed payload in the success envelope, stamping a fresh timestamp."""

    return CanonicalResponse(
        content=content,
        is_function_call=is_function_call,
        function_call=function_call,
        model=model,
        finish_reason=finish_reason,
        stats=stats or TokenStats(),
        timestamp=utc_timestamp(),
    )


def create_error_response(
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
) -> CanonicalError:
    """Wrap a failure in the error envelope, stamping a fresh timestamp."""

    return CanonicalError(
        message=message,
        status_code=status_code,
        details=dict(details or {}),
        timestamp=utc_timestamp(),
    )
