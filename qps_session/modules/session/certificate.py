"""
Client certificate handling for QPS.

QPS authenticates callers by TLS client certificate. Qlik exports these
as PKCS#12 (.pfx) bundles; PEM bundles with certificate and key are
accepted as well.
"""

import logging
import os
import ssl
import tempfile
from pathlib import Path
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from ...exceptions import SessionConfigurationError

logger = logging.getLogger(__name__)

PEM_MARKER = b"-----BEGIN"


def load_certificate(path: str) -> bytes:
    """
    Read raw certificate bytes.

    OSError (missing file, permissions) propagates unchanged.
    """
    return Path(path).read_bytes()


def pkcs12_to_pem(data: bytes, passphrase: str = "") -> bytes:
    """
    Convert a PKCS#12 bundle into a PEM bundle with key, certificate and chain.

    Args:
        data: Raw .pfx bytes
        passphrase: Bundle passphrase ("" for none)

    Returns:
        Unencrypted PEM bytes suitable for SSLContext.load_cert_chain
    """
    password = passphrase.encode() if passphrase else None
    try:
        key, certificate, additional = pkcs12.load_key_and_certificates(data, password)
    except ValueError as e:
        raise SessionConfigurationError(
            f"Could not decode client certificate: {e}", field="certificate_path"
        ) from e

    if key is None or certificate is None:
        raise SessionConfigurationError(
            "Client certificate bundle must contain a private key and a certificate.",
            field="certificate_path",
        )

    # Leaf certificate first, then its chain, then the key
    pem = certificate.public_bytes(serialization.Encoding.PEM)
    for extra in additional or []:
        pem += extra.public_bytes(serialization.Encoding.PEM)
    pem += key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return pem


def build_ssl_context(
    certificate: Optional[bytes] = None,
    passphrase: str = "",
    skip_verification: bool = True,
) -> ssl.SSLContext:
    """
    Build the TLS context used for HTTPS requests to QPS.

    Args:
        certificate: Client certificate bytes (PKCS#12 or PEM), or None
        passphrase: Certificate passphrase
        skip_verification: Disable server certificate chain and hostname checks

    Returns:
        Configured SSLContext
    """
    context = ssl.create_default_context()
    if skip_verification:
        logger.warning("Server certificate verification is disabled for QPS requests")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    if certificate is None:
        return context

    if PEM_MARKER in certificate:
        pem = certificate
    else:
        pem = pkcs12_to_pem(certificate, passphrase)

    # load_cert_chain only reads from files
    fd, pem_path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(pem)
        # Always a str so OpenSSL never prompts for a key passphrase
        context.load_cert_chain(pem_path, password=passphrase)
    except OSError as e:
        raise SessionConfigurationError(
            f"Could not load client certificate: {e}", field="certificate_path"
        ) from e
    finally:
        os.unlink(pem_path)

    return context
