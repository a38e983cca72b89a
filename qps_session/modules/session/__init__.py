"""
Session Module - Black Box Interface

Purpose: Manage a QPS proxy session for one identity
Interface: add_session(), get_session(), delete_session()
Hidden: Path derivation, TLS material, response validation

Replaceable with any client that honors the same response contract.
"""

from .client import SessionClient
from .models import RequestPaths, SessionProfile
from .validation import format_prefix, is_response_shape_valid

__all__ = [
    "RequestPaths",
    "SessionClient",
    "SessionProfile",
    "format_prefix",
    "is_response_shape_valid",
]
