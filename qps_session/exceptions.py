"""Exceptions raised by the session client."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a session request failed."""

    PROTOCOL_MISMATCH = "protocol_mismatch"
    IDENTITY_MISMATCH = "identity_mismatch"
    TRANSPORT = "transport"


class SessionClientError(Exception):
    """Base exception for the session client"""

    pass


class SessionConfigurationError(SessionClientError, ValueError):
    """Client configuration or identity profile is invalid"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class SessionRequestError(SessionClientError):
    """
    A session request did not produce a valid session.

    ``raw_message`` holds the text the caller would have seen from the
    server (or the transport), unchanged, so callers can keep matching on
    substrings such as "No session with id".
    """

    def __init__(self, kind: ErrorKind, raw_message: str):
        self.kind = kind
        self.raw_message = raw_message
        super().__init__(raw_message)

    def __str__(self) -> str:
        return self.raw_message


class SessionResponseError(SessionRequestError):
    """Response body was not a session for the requested identity"""

    def __init__(self, raw_message: str, kind: ErrorKind = ErrorKind.PROTOCOL_MISMATCH):
        super().__init__(kind, raw_message)


class SessionTransportError(SessionRequestError):
    """Connection, TLS or timeout failure"""

    def __init__(self, transport_error: Exception):
        self.transport_error = transport_error
        super().__init__(ErrorKind.TRANSPORT, str(transport_error))
