"""
QPS session API client.

Creates, fetches and deletes a proxy session for one
(user directory, user id, session id) identity.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from ...config.provider import SessionClientConfig
from ...exceptions import (
    ErrorKind,
    SessionConfigurationError,
    SessionResponseError,
    SessionTransportError,
)
from .certificate import build_ssl_context, load_certificate
from .models import RequestPaths, SessionProfile
from .validation import (
    extract_user_info,
    format_prefix,
    identities_match,
    is_response_shape_valid,
)

logger = logging.getLogger(__name__)

XRFKEY_HEADER = "X-qlik-xrfkey"

# Field name -> the key callers pass in a profile mapping
PROFILE_KEYS = {
    name: field.alias or name for name, field in SessionProfile.model_fields.items()
}


def _coerce_profile(profile: Union[SessionProfile, Mapping[str, Any], None]) -> SessionProfile:
    """Validate a profile, naming the first bad field in declaration order."""
    if isinstance(profile, SessionProfile):
        return profile
    if profile is None:
        raise SessionConfigurationError("profile is missing.", field="profile")

    try:
        return SessionProfile.model_validate(profile)
    except ValidationError as e:
        error = e.errors()[0]
        if not error["loc"]:
            raise SessionConfigurationError(
                f"profile must be a mapping, got {type(profile).__name__}.", field="profile"
            ) from e
        loc = str(error["loc"][0])
        field = PROFILE_KEYS.get(loc, loc)
        if error["type"] == "missing" or error.get("input") is None:
            message = f"profile.{field} is missing."
        else:
            message = f"profile.{field} is invalid: {error['msg']}."
        raise SessionConfigurationError(message, field=field) from e


class SessionClient:
    """
    Client for the QPS session endpoints.

    Everything derived from the configuration and the profile (paths,
    headers, request body, TLS context) is computed once here. A different
    identity needs a new client.
    """

    format_prefix = staticmethod(format_prefix)
    is_response_shape_valid = staticmethod(is_response_shape_valid)

    def __init__(
        self,
        config: Optional[SessionClientConfig] = None,
        profile: Union[SessionProfile, Mapping[str, Any], None] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize session client.

        Args:
            config: Connection settings (defaults apply when None)
            profile: Identity with userDirectory, userId and sessionId
            transport: Optional httpx transport used instead of the network

        Raises:
            SessionConfigurationError: Profile field missing or certificate unusable
            OSError: Certificate file could not be read
        """
        self.profile = _coerce_profile(profile)
        self.config = config or SessionClientConfig()
        self.prefix = format_prefix(self.config.prefix)

        self.certificate: Optional[bytes] = None
        if self.config.certificate_path:
            self.certificate = load_certificate(self.config.certificate_path)

        self.ssl_context = None
        if self.config.is_secure:
            self.ssl_context = build_ssl_context(
                self.certificate,
                passphrase=self.config.passphrase,
                skip_verification=self.config.skip_certificate_verification,
            )

        self.base_url = f"{self.config.scheme}://{self.config.host}:{self.config.port}"
        self.paths = RequestPaths.build(self.prefix, self.profile.session_id, self.config.xrfkey)
        self.headers = {
            XRFKEY_HEADER: self.config.xrfkey,
            "Content-Type": "application/json",
        }
        self.request_body = self.profile.to_request_body()
        self._transport = transport

    def has_valid_user_info(self, session: Any) -> bool:
        """
        Check that a parsed session belongs to this client's identity.

        Args:
            session: Parsed response, flat or wrapped in "Session"

        Returns:
            True if user directory and user id match, ignoring case
        """
        user_directory, user_id = extract_user_info(session)
        return identities_match(self.profile.user_directory, user_directory) and identities_match(
            self.profile.user_id, user_id
        )

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"timeout": self.config.timeout}
        if self.ssl_context is not None:
            options["verify"] = self.ssl_context
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def send_request(self, method: str, path: str) -> Dict[str, Any]:
        """
        Send one request to the session API.

        Args:
            method: HTTP method, "GET", "POST" or "DELETE"
            path: Request path including the xrfkey query

        Returns:
            Parsed session object

        Raises:
            SessionResponseError: Body is not a session for this identity;
                the message is the raw response text
            SessionTransportError: Connection, TLS or timeout failure
        """
        logger.debug(f"QPS {method} {path}")
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    content=self.request_body,
                    headers=self.headers,
                )
        except httpx.TransportError as e:
            logger.error(f"QPS {method} {path} failed: {e!r}")
            raise SessionTransportError(e) from e

        text = response.text
        if not is_response_shape_valid(text):
            logger.warning(f"QPS {method} returned a non-session body ({response.status_code}): {text}")
            raise SessionResponseError(text)

        try:
            session = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"QPS {method} returned malformed JSON: {e}")
            raise SessionResponseError(text) from e

        if not self.has_valid_user_info(session):
            logger.warning(f"QPS {method} returned a session for another user: {text}")
            raise SessionResponseError(text, kind=ErrorKind.IDENTITY_MISMATCH)

        return session

    async def get_session(self) -> Dict[str, Any]:
        """Fetch the session."""
        return await self.send_request("GET", self.paths.get)

    async def add_session(self) -> Dict[str, Any]:
        """Create the session."""
        return await self.send_request("POST", self.paths.add)

    async def delete_session(self) -> Dict[str, Any]:
        """Delete the session; QPS returns the removed session wrapped in "Session"."""
        return await self.send_request("DELETE", self.paths.delete)
