from .client import Way2enjoyClient, encode_api_key, get_client
from .streams import drain_to_bytes, drain_to_file, drain_to_string

__all__ = [
    "Way2enjoyClient",
    "drain_to_bytes",
    "drain_to_file",
    "drain_to_string",
    "encode_api_key",
    "get_client",
]
