"""Typed gateway errors and conversion of arbitrary failures into error envelopes."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping
from typing import Any, Optional

from providers.shared import CanonicalError, create_error_response

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for errors that carry an HTTP status and a machine-readable code."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code, "statusCode": self.status_code, "details": self.details}


class BadRequestError(GatewayError):
    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(GatewayError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(GatewayError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(GatewayError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(GatewayError):
    status_code = 409
    code = "CONFLICT"


class ValidationError(GatewayError):
    status_code = 422
    code = "VALIDATION_ERROR"


class RateLimitError(GatewayError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"


class ServerError(GatewayError):
    status_code = 500
    code = "SERVER_ERROR"


class ServiceUnavailableError(GatewayError):
    status_code = 503
    code = "SERVICE_UNAVAILABLE"


class InvalidFunctionCallError(BadRequestError):
    """Raised by :func:`utils.extraction.process_function_call` for nameless calls."""

    code = "INVALID_FUNCTION_CALL"

    def __init__(self, message: str = "Invalid function call format", **kwargs):
        super().__init__(message, **kwargs)


# Ordered: the first group whose keyword appears in the message decides the class.
ERROR_CLASSIFIERS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    ("RATE_LIMIT_EXCEEDED", 429, ("rate limit", "quota")),
    ("NOT_FOUND", 404, ("not found", "404")),
    ("UNAUTHORIZED", 401, ("unauthorized", "401")),
    ("FORBIDDEN", 403, ("forbidden", "403")),
    ("VALIDATION_ERROR", 400, ("validation", "400")),
)


def classify_error_message(message: str) -> Optional[tuple[str, int]]:
    """Return ``(code, status)`` for the first keyword group found in ``message``."""

    lowered = str(message or "").lower()
    for code, status, keywords in ERROR_CLASSIFIERS:
        if any(keyword in lowered for keyword in keywords):
            return code, status
    return None


def standardize_error(error: Any, service_name: str = "Unknown") -> CanonicalError:
    """Convert an exception, error mapping or message string into a ``CanonicalError``.

    Keyword classification of the message overrides any code or status the
    error carried; messages matching no keyword keep the seeded values
    (``INTERNAL_ERROR``/500 unless the error supplied its own).
    """

    message = "Unknown error"
    code = "INTERNAL_ERROR"
    status_code = 500
    details: dict[str, Any] = {}

    if isinstance(error, BaseException):
        message = str(error) or message
        details = {"stack": "".join(traceback.format_exception(type(error), error, error.__traceback__))}
        if isinstance(error, GatewayError):
            code = error.code
            status_code = error.status_code
    elif isinstance(error, Mapping):
        raw_message = error.get("message")
        message = str(raw_message) if raw_message else message
        code = error.get("code") or code
        status_code = error.get("statusCode") or error.get("status") or status_code
        raw_details = error.get("details")
        if isinstance(raw_details, Mapping):
            details = dict(raw_details)
        elif raw_details:
            details = {"details": raw_details}
    elif isinstance(error, str):
        message = error

    classified = classify_error_message(message)
    if classified is not None:
        code, status_code = classified

    logger.error("%s error: [%s] %s", service_name, code, message)

    return create_error_response(message, status_code, {"code": code, "serviceName": service_name, **details})
