"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

from ..exceptions import SessionConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4243
DEFAULT_XRFKEY = "abcdefghijklmnop"


@dataclass(frozen=True)
class SessionClientConfig:
    """
    Connection settings for the QPS session API.

    Attributes:
        host: QPS host name
        port: QPS port (4243 is the QPS default)
        prefix: Virtual proxy prefix, normalized by the client
        xrfkey: Anti-forgery token sent as header and query parameter
        certificate_path: Client certificate (PKCS#12 or PEM), optional
        passphrase: Passphrase for the client certificate
        is_secure: Use HTTPS when True, plain HTTP otherwise
        skip_certificate_verification: Do not verify the server certificate chain
        timeout: Request timeout in seconds, None for no timeout
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    prefix: Optional[str] = None
    xrfkey: str = DEFAULT_XRFKEY
    certificate_path: Optional[str] = None
    passphrase: str = ""
    is_secure: bool = True
    # QPS usually presents a self-signed certificate
    skip_certificate_verification: bool = True
    timeout: Optional[float] = None

    def __post_init__(self):
        if not self.host:
            raise SessionConfigurationError("config.host must not be empty.", field="host")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise SessionConfigurationError(
                f"config.port must be an integer between 1 and 65535, got {self.port!r}.",
                field="port",
            )
        if not self.xrfkey:
            raise SessionConfigurationError("config.xrfkey must not be empty.", field="xrfkey")
        if self.timeout is not None and (
            isinstance(self.timeout, bool)
            or not isinstance(self.timeout, (int, float))
            or self.timeout <= 0
        ):
            raise SessionConfigurationError(
                f"config.timeout must be positive, got {self.timeout!r}.", field="timeout"
            )

    @property
    def scheme(self) -> str:
        return "https" if self.is_secure else "http"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_client_config(self) -> SessionClientConfig:
        """Get session client configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_client_config(self) -> SessionClientConfig:
        """Get session client configuration from environment variables."""
        port = os.getenv("QPS_PORT", str(DEFAULT_PORT))
        try:
            port_value = int(port)
        except ValueError:
            raise SessionConfigurationError(
                f"QPS_PORT must be an integer, got {port!r}.", field="port"
            )

        timeout = os.getenv("QPS_TIMEOUT")
        timeout_value = None
        if timeout:
            try:
                timeout_value = float(timeout)
            except ValueError:
                raise SessionConfigurationError(
                    f"QPS_TIMEOUT must be a number, got {timeout!r}.", field="timeout"
                )

        return SessionClientConfig(
            host=os.getenv("QPS_HOST", DEFAULT_HOST),
            port=port_value,
            prefix=os.getenv("QPS_PREFIX"),
            xrfkey=os.getenv("QPS_XRFKEY", DEFAULT_XRFKEY),
            certificate_path=os.getenv("QPS_CERTIFICATE") or None,
            passphrase=os.getenv("QPS_PASSPHRASE", ""),
            is_secure=os.getenv("QPS_SECURE", "true").lower() == "true",
            skip_certificate_verification=os.getenv("QPS_SKIP_CERT_VERIFY", "true").lower() == "true",
            timeout=timeout_value,
        )
