"""
vault_uami_auth.transport

Pooled HTTP transport used by the login exchange.

Responsibilities:
- Build one `httpx.Client` with connection pooling and explicit timeouts.
- Apply the TLS trust policy chosen for the deployment profile.
- Report unusable trust material as `TransportConfigurationError`.
"""

from __future__ import annotations

import enum
import ssl
from dataclasses import dataclass
from pathlib import Path

import httpx

from vault_uami_auth.auth.errors import AuthStage, TransportConfigurationError
from vault_uami_auth.observability.logging import get_logger

log = get_logger(__name__)


class TrustPolicy(str, enum.Enum):
    STANDARD = "standard"
    PERMISSIVE = "permissive"

    @classmethod
    def for_profile(cls, env: str) -> TrustPolicy:
        # Non-production profiles talk to dev Vault clusters with self-signed certificates.
        if env in ("dev", "test"):
            return cls.PERMISSIVE
        return cls.STANDARD


@dataclass(frozen=True, slots=True)
class TransportOptions:
    trust_policy: TrustPolicy = TrustPolicy.STANDARD
    ca_bundle: Path | None = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0
    max_connections: int = 10
    max_keepalive_connections: int = 5


def build_ssl_context(options: TransportOptions) -> ssl.SSLContext:
    try:
        if options.trust_policy is TrustPolicy.PERMISSIVE:
            ctx = ssl.create_default_context()
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            return ctx

        cafile = str(options.ca_bundle) if options.ca_bundle is not None else None
        return ssl.create_default_context(cafile=cafile)
    except (ssl.SSLError, OSError, ValueError) as e:
        log.error(
            "transport_config_failed",
            stage=AuthStage.TRANSPORT_CONFIG.value,
            ca_bundle=str(options.ca_bundle) if options.ca_bundle else None,
            error=str(e),
        )
        raise TransportConfigurationError(
            f"Failed to configure TLS trust material: {e}", cause=e
        ) from e


def build_transport(options: TransportOptions | None = None) -> httpx.Client:
    """
    Build the pooled client shared by both calls of the exchange.

    The caller owns the returned client and must close it; build it once per
    process, not per login.
    """

    options = options or TransportOptions()
    ctx = build_ssl_context(options)

    client = httpx.Client(
        verify=ctx,
        timeout=httpx.Timeout(options.read_timeout, connect=options.connect_timeout),
        limits=httpx.Limits(
            max_connections=options.max_connections,
            max_keepalive_connections=options.max_keepalive_connections,
        ),
    )
    log.info(
        "transport_built",
        trust_policy=options.trust_policy.value,
        ca_bundle=str(options.ca_bundle) if options.ca_bundle else None,
        connect_timeout=options.connect_timeout,
        read_timeout=options.read_timeout,
    )
    if options.trust_policy is TrustPolicy.PERMISSIVE:
        log.warning("tls_verification_disabled", trust_policy=options.trust_policy.value)
    return client


# --- Module Notes -----------------------------------------------------------
# httpx.Client pools are thread-safe, so one client may serve concurrent logins.
