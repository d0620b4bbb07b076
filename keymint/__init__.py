"""Python client for the KeyMint license management API."""

from .client import KeyMintClient, new_client
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from .errors import (
    ApiError,
    ConfigError,
    DecodingError,
    EncodingError,
    KeyMintError,
    TransportError,
    UnclassifiedApiError,
)
from .types import *  # noqa: F401,F403
from .types import __all__ as _types_all

__version__ = "1.0.0"

__all__ = [
    "KeyMintClient",
    "new_client",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "KeyMintError",
    "ConfigError",
    "EncodingError",
    "TransportError",
    "ApiError",
    "UnclassifiedApiError",
    "DecodingError",
] + list(_types_all)
