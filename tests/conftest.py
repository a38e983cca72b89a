"""
Shared pytest fixtures for qps_session tests.

This module provides common fixtures including:
- QpsStub: httpx transport answering with canned QPS responses
- Client configuration and identity profiles
- Generated client certificates (PKCS#12 and PEM)
"""

import json
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from qps_session import SessionClient, SessionClientConfig  # noqa: E402

SESSION_ID = "32a4fbed-676d-47f9-a321-cb2f267e2918"
XRFKEY = "abcdefghijklmnop"
CERT_PASSPHRASE = "secret"


# =============================================================================
# QPS Transport Stub
# =============================================================================

@dataclass
class QpsStub:
    """
    Stand-in for the QPS session API.

    Every request is recorded; the answer is ``body`` with ``status_code``,
    or ``error`` is raised as a transport failure.
    """
    body: str = ""
    status_code: int = 200
    error: Optional[Callable[[httpx.Request], Exception]] = None
    requests: List[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def session_body(user_directory: str = "portal", user_id: str = "john_doe", session_id: str = SESSION_ID) -> dict:
    """Session object as QPS serializes it."""
    return {
        "UserDirectory": user_directory,
        "UserId": user_id,
        "Attributes": [],
        "SessionId": session_id,
    }


@pytest.fixture
def profile():
    """Identity the tests act for."""
    return {
        "userDirectory": "portal",
        "userId": "john_doe",
        "sessionId": SESSION_ID,
    }


@pytest.fixture
def config():
    """Client configuration without client certificate."""
    return SessionClientConfig(
        host="qs02.mydomain.com",
        port=4243,
        prefix="/portal",
        xrfkey=XRFKEY,
    )


@pytest.fixture
def qps_stub():
    return QpsStub()


@pytest.fixture
def make_client(config, profile, qps_stub):
    """Build a client wired to the QPS stub."""

    def _make(body: Optional[dict] = None, text: Optional[str] = None, **overrides) -> SessionClient:
        if body is not None:
            qps_stub.body = json.dumps(body)
        if text is not None:
            qps_stub.body = text
        return SessionClient(
            overrides.pop("config", config),
            overrides.pop("profile", profile),
            transport=qps_stub.transport,
        )

    return _make


# =============================================================================
# Client Certificates
# =============================================================================

@pytest.fixture(scope="session")
def client_key_and_certificate():
    """Self-signed client certificate like the ones QMC exports."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "QlikClient")])
    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return key, certificate


@pytest.fixture
def pfx_file(tmp_path, client_key_and_certificate):
    """Passphrase protected PKCS#12 bundle on disk."""
    key, certificate = client_key_and_certificate
    data = pkcs12.serialize_key_and_certificates(
        b"client",
        key,
        certificate,
        None,
        serialization.BestAvailableEncryption(CERT_PASSPHRASE.encode()),
    )
    path = tmp_path / "client.pfx"
    path.write_bytes(data)
    return path


@pytest.fixture
def pem_bytes(client_key_and_certificate):
    """Unencrypted PEM bundle with certificate and key."""
    key, certificate = client_key_and_certificate
    return certificate.public_bytes(serialization.Encoding.PEM) + key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
