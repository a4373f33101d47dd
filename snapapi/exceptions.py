"""SDK exception hierarchy."""

from __future__ import annotations

from typing import Any, Dict, Optional


class SnapAPIError(Exception):
    """Base exception for all SDK errors.

    Carries the server's machine-readable ``code``, the HTTP ``status_code``
    (0 when no HTTP exchange took place) and optional structured ``details``.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SnapAPIValidationError(SnapAPIError, ValueError):
    """Raised when required input is missing or malformed, before any request."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", 0, details)


class SnapAPIConnectionError(SnapAPIError):
    """Raised when the transport fails to produce any HTTP response."""

    def __init__(self, message: str):
        super().__init__(message, "CONNECTION_ERROR", 0)


class SnapAPITimeoutError(SnapAPIConnectionError):
    """Raised when a request exceeds the configured timeout."""


class SnapAPIHTTPError(SnapAPIError):
    """Raised when the API returns a status of 400 or above."""
