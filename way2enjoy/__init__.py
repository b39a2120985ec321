"""Python client for the Way2enjoy image and document compression API."""
from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    MissingResultUrlError,
    TransportFailureError,
    Way2enjoyError,
)
from .models import (
    ApiError,
    CompressionResult,
    RequestStatus,
    StoreTarget,
    StreamResult,
    TransformOptions,
)
from .services import Way2enjoyClient, get_client

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "CompressionResult",
    "ConfigurationError",
    "MissingResultUrlError",
    "RequestStatus",
    "StoreTarget",
    "StreamResult",
    "TransformOptions",
    "TransportFailureError",
    "Way2enjoyClient",
    "Way2enjoyError",
    "get_client",
]
