from __future__ import annotations


class StorefrontError(Exception):
    """Base class for failures surfaced to the viewer."""


class CodeValidationError(StorefrontError):
    """The purchase code was rejected (invalid, expired or unusable)."""


class ApiError(StorefrontError):
    """The remote API answered with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None, server_message: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class TransportError(ApiError):
    """The remote API could not be reached (DNS, timeout, connection reset)."""


class AdminAuthError(StorefrontError):
    """Admin-only operation attempted without a valid admin login."""
