"""Exception hierarchy shared by the AI pipeline and the data-store proxy.

Every error carries the HTTP status and the stable, user-facing message that
the API layer returns.  Parsing failures additionally keep a bounded excerpt
of the offending model output (``debug``) which is only exposed outside
production.
"""
from __future__ import annotations

from typing import Optional

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

DEBUG_SNIPPET_LENGTH = 200
INVALID_FORMAT_MESSAGE = "AI returned invalid format. Please try again."


def snippet(text: Optional[str], limit: int = DEBUG_SNIPPET_LENGTH) -> str:
    """Return the first ``limit`` characters of ``text``."""

    return (text or "")[:limit]


class GlobeTrotterError(Exception):
    """Base exception for all application errors."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong!"

    def __init__(self, message: Optional[str] = None, *, debug: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.debug = debug
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Request / configuration errors
# ---------------------------------------------------------------------------


class MissingParameterError(GlobeTrotterError):
    """A required request parameter is absent or blank."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Valid city name is required"


class ServiceUnavailableError(GlobeTrotterError):
    """The text generation service has no credential configured."""

    default_message = "AI service is not configured properly"


# ---------------------------------------------------------------------------
# Provider errors (raised around the generation call)
# ---------------------------------------------------------------------------


class ProviderError(GlobeTrotterError):
    """Generic generation failure."""

    default_message = "Failed to generate a response. Please try again."


class ProviderAuthError(ProviderError):
    default_message = "AI service authentication failed"


class ProviderQuotaError(ProviderError):
    status_code = HTTP_429_TOO_MANY_REQUESTS
    default_message = "AI service quota exceeded. Please try again later."


def classify_provider_error(exc: BaseException, generic_message: str) -> ProviderError:
    """Map a failure raised by the generation client onto a provider error."""

    text = str(exc)
    if "API key" in text:
        return ProviderAuthError()
    if "quota" in text:
        return ProviderQuotaError()
    return ProviderError(generic_message)


# ---------------------------------------------------------------------------
# Response parsing errors
# ---------------------------------------------------------------------------


class AIResponseError(GlobeTrotterError):
    """The model answered but its output could not be used."""

    default_message = INVALID_FORMAT_MESSAGE

    def __init__(self, reason: str, *, text: Optional[str] = None) -> None:
        super().__init__(debug=snippet(text))
        self.reason = reason

    def __str__(self) -> str:
        return self.reason


class MalformedJSONError(AIResponseError):
    """The normalised text is not valid JSON."""


class UnexpectedShapeError(AIResponseError):
    """The JSON value lacks the required top-level structure."""


class NoValidEntriesError(AIResponseError):
    """Every suggestion entry failed the field presence check."""

    def __init__(self, *, text: Optional[str] = None) -> None:
        super().__init__("no valid suggestions in response", text=text)


# ---------------------------------------------------------------------------
# Data-store errors
# ---------------------------------------------------------------------------


class AuthenticationError(GlobeTrotterError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Authentication failed"


class DataStoreError(GlobeTrotterError):
    """The hosted database rejected a request."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Data store request failed"


class NotFoundError(DataStoreError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "Resource not found"
