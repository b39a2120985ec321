"""Exceptions raised by the Way2enjoy client.

Only local and transport-level problems are raised. Errors reported by the
API itself (bad key, exhausted quota, ...) come back as
:class:`~way2enjoy.models.ApiError` values instead.
"""
from __future__ import annotations


class Way2enjoyError(Exception):
    """Base class for all client errors."""


class TransportFailureError(Way2enjoyError):
    """Raised when a request produced no HTTP response at all."""

    def __init__(self, method: str, url: str, reason: str):
        super().__init__(f"{method} {url} failed without a response: {reason}")
        self.method = method
        self.url = url
        self.reason = reason


class MissingResultUrlError(Way2enjoyError):
    """Raised when a transform is requested for a result without an output URL."""


class ConfigurationError(Way2enjoyError):
    """Raised when the client cannot be built from settings."""
