"""Errors raised by repository adapters."""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for all repository errors."""


class TransportError(RepositoryError):
    """Raised when a remote call returns a non-200 status or cannot be made.

    Attributes:
        status_code: HTTP status code, None when no response was received
        body: Response body (or the network error text)
    """

    def __init__(self, action: str, status_code: int | None, body: str = ""):
        self.action = action
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Failed to {action}: {body}"
        else:
            message = f"Failed to {action}: {status_code} {body}"
        super().__init__(message)


class NotFoundError(RepositoryError):
    """Raised when an operation targets an identifier absent from the store."""


class IdentityUnresolvedError(RepositoryError):
    """Raised when a store accepted a record but returned no usable identifier."""


class SchemaMismatchError(RepositoryError):
    """Raised when a decoded response does not have the expected shape."""
