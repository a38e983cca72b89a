"""
qps_session - Qlik Sense Proxy Service session client

Creates, fetches and deletes proxy sessions through the QPS session API.

Modules:
- session: Session client, request derivation and response validation
- config: Client configuration and providers
"""

from .config.provider import SessionClientConfig
from .exceptions import (
    ErrorKind,
    SessionClientError,
    SessionConfigurationError,
    SessionRequestError,
    SessionResponseError,
    SessionTransportError,
)
from .modules.session import SessionClient, SessionProfile, format_prefix, is_response_shape_valid

__version__ = "1.0.0"

__all__ = [
    "ErrorKind",
    "SessionClient",
    "SessionClientConfig",
    "SessionClientError",
    "SessionConfigurationError",
    "SessionProfile",
    "SessionRequestError",
    "SessionResponseError",
    "SessionTransportError",
    "format_prefix",
    "is_response_shape_valid",
]
