"""Error hierarchy raised by the request builder and session gate.

Every error carries a fixed, caller-facing prefix per kind followed by a
lower-cased detail clause, e.g. ``Invalid parameter 'temperature': ...``.
"""

from __future__ import annotations

from typing import Any, Optional


_UNKNOWN_DETAIL = "< Error description not available. >"


def _detail(value: Any) -> str:
    """Return a lower-cased description of an exception or message."""
    if isinstance(value, BaseException):
        return str(value).lower()
    if isinstance(value, str):
        return value.lower()
    return _UNKNOWN_DETAIL


class ChatBuilderError(Exception):
    """Base class for all errors raised by this package."""


class NotInitializedError(ChatBuilderError):
    """Raised when a request is created before ``initialize(...)``."""

    def __init__(self) -> None:
        super().__init__(
            "Module not initialized. You must call the initialize(...) function first."
        )


class InvalidApiKeyError(ChatBuilderError):
    """Raised when the API key supplied for initialization is empty."""

    def __init__(self) -> None:
        super().__init__("API key used for initialization is invalid.")


class FailedToCreateClientError(ChatBuilderError):
    """Raised when the transport client cannot be constructed."""

    def __init__(self, original: Any) -> None:
        self.original = original
        super().__init__(f"Failed to create client: {_detail(original)}")


class InvalidParameterError(ChatBuilderError, ValueError):
    """Raised when a single argument violates a documented constraint.

    Attributes:
        name: Name of the offending parameter.
        reason: Lower-cased description of the violation.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = _detail(reason)
        super().__init__(f"Invalid parameter '{name}': {self.reason}")


class IncorrectUseError(ChatBuilderError):
    """Raised when a cross-field or sequencing rule is broken."""

    def __init__(self, reason: str) -> None:
        self.reason = _detail(reason)
        super().__init__(f"Incorrect use: {self.reason}")


class OpenAIFailureError(ChatBuilderError):
    """Raised when the transport call to the provider fails."""

    def __init__(self, original: Optional[Any]) -> None:
        self.original = original
        super().__init__(f"OpenAI server error: {_detail(original)}")
