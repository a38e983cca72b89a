"""
Pure helpers for the QPS session contract.

The session API answers with JSON on success and with plain text
(e.g. "No session with id '...'") on most failures, so responses are
checked structurally before they are parsed.
"""

import re
from typing import Any, Optional, Tuple

# Top-level keys of a session object, in the order QPS serializes them
SESSION_SHAPE = re.compile(
    r'^\{.*"UserDirectory":.*"UserId":.*"Attributes":.*"SessionId":.*\}$',
    re.DOTALL,
)


def format_prefix(prefix: Optional[str]) -> str:
    """
    Normalize a virtual proxy prefix.

    Args:
        prefix: Raw prefix such as "portal", "/portal/" or None

    Returns:
        Prefix with a single leading "/" and no trailing "/", or "" when empty
    """
    # Every trailing "/" goes, so format_prefix(format_prefix(x)) == format_prefix(x)
    prefix = (prefix or "").rstrip("/")
    if not prefix:
        return ""
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix


def is_response_shape_valid(text: str) -> bool:
    """Check that a raw response body looks like a serialized session."""
    return bool(SESSION_SHAPE.match(text))


def extract_user_info(body: Any) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull user directory and user id out of a session response.

    New sessions come back flat; DELETE wraps the removed session in a
    "Session" object.

    Returns:
        Tuple of (user_directory, user_id), either may be None
    """
    if not isinstance(body, dict):
        return None, None

    nested = body.get("Session")
    if not isinstance(nested, dict):
        nested = {}

    user_directory = body.get("UserDirectory") or nested.get("UserDirectory")
    user_id = body.get("UserId") or nested.get("UserId")
    return user_directory, user_id


def identities_match(expected: str, actual: Any) -> bool:
    """Case-insensitive comparison, uppercasing both sides."""
    if not isinstance(actual, str):
        return False
    return actual.upper() == expected.upper()
