"""Core utilities shared by the Panda client components."""

from panda_client.core.logging import get_logger, configure_logging
from panda_client.core.errors import (
    PandaClientError,
    InvalidConfiguration,
    SigningError,
    TransportError,
    InvalidEntity,
    ApiError,
    MalformedResponse,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    # Errors
    "PandaClientError",
    "InvalidConfiguration",
    "SigningError",
    "TransportError",
    "InvalidEntity",
    "ApiError",
    "MalformedResponse",
]
