"""
vault_uami_auth

Azure managed-identity (UAMI) login for HashiCorp Vault.

Responsibilities:
- Expose package version metadata.
- Re-export the small public surface used by bootstrap callers.
"""

from vault_uami_auth.auth.base import ClientAuthentication, TokenAuthentication
from vault_uami_auth.auth.errors import (
    AuthenticationError,
    AuthStage,
    ConfigurationError,
    TransportConfigurationError,
    VaultAuthError,
)
from vault_uami_auth.auth.models import AuthConfig, SessionToken
from vault_uami_auth.auth.uami import UamiAuthentication, UamiAuthenticator
from vault_uami_auth.transport import TransportOptions, TrustPolicy, build_transport

__all__ = [
    "AuthConfig",
    "AuthStage",
    "AuthenticationError",
    "ClientAuthentication",
    "ConfigurationError",
    "SessionToken",
    "TokenAuthentication",
    "TransportConfigurationError",
    "TransportOptions",
    "TrustPolicy",
    "UamiAuthentication",
    "UamiAuthenticator",
    "VaultAuthError",
    "__version__",
    "build_transport",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Submodules import nothing from this file, so re-exports here cannot create cycles.
