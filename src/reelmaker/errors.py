"""Error types and provider error classification."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ReelMakerError(Exception):
    """Base class for application errors."""


class ConfigurationError(ReelMakerError, ValueError):
    """A required provider credential or setting is missing."""


class ProviderError(ReelMakerError):
    """An external provider (LLM, video, search) failed."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class ErrorCategory(str, Enum):
    """Categories of provider failures."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    UNKNOWN = "unknown"


CATEGORY_MESSAGES = {
    ErrorCategory.NOT_FOUND: (
        "The AI model endpoint was not found. Please check if the model is available."
    ),
    ErrorCategory.UNAUTHORIZED: "API key is invalid or expired. Please check your API key.",
    ErrorCategory.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorCategory.BAD_REQUEST: (
        "The API rejected the request. "
        "The prompt may be too long or contain unsupported content."
    ),
    ErrorCategory.UNKNOWN: "Failed to process your request",
}


def categorize_error(text: str) -> ErrorCategory:
    """Map provider error text to an ErrorCategory.

    Checked in order: 404, 401, 429, 400. The first match wins, so a message
    mentioning both "404" and "400" is reported as not-found.
    """
    if "404" in text or "Not Found" in text:
        return ErrorCategory.NOT_FOUND
    if "401" in text or "Unauthorized" in text:
        return ErrorCategory.UNAUTHORIZED
    if "429" in text or "Too Many Requests" in text:
        return ErrorCategory.RATE_LIMITED
    if "400" in text or "Bad Request" in text:
        return ErrorCategory.BAD_REQUEST
    return ErrorCategory.UNKNOWN


def classify_provider_error(text: str) -> str:
    """Return a user-facing message for provider error text."""
    return CATEGORY_MESSAGES[categorize_error(text)]


class ErrorResponse(BaseModel):
    """JSON body returned by every failing endpoint."""

    error: str
    details: Optional[Any] = None
