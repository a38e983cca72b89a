"""
Session client data models.

These models define the identity a client acts for and the request
material derived from it.
"""

import json
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class SessionProfile(BaseModel):
    """Identity of the session to create, fetch or delete."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_directory: str = Field(..., alias="userDirectory", description="QPS user directory")
    user_id: str = Field(..., alias="userId", description="User id within the directory")
    session_id: str = Field(..., alias="sessionId", description="Session id, usually a UUID")

    def to_request_body(self) -> str:
        """Serialize the identity as the JSON document QPS expects."""
        return json.dumps(
            {
                "UserDirectory": self.user_directory,
                "UserId": self.user_id,
                "SessionId": self.session_id,
            },
            separators=(",", ":"),
        )


@dataclass(frozen=True)
class RequestPaths:
    """Request paths for the three session operations."""

    get: str
    delete: str
    add: str

    @classmethod
    def build(cls, prefix: str, session_id: str, xrfkey: str) -> "RequestPaths":
        """
        Derive request paths.

        Args:
            prefix: Normalized virtual proxy prefix ("" or "/name")
            session_id: Session id embedded in get/delete paths
            xrfkey: Anti-forgery token appended as query parameter
        """
        base = f"/qps{prefix}/session"
        session_path = f"{base}/{session_id}?xrfkey={xrfkey}"
        return cls(
            get=session_path,
            delete=session_path,
            add=f"{base}/?xrfkey={xrfkey}",
        )
