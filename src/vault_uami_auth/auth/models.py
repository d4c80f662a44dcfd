"""
vault_uami_auth.auth.models

Auth value types.

Responsibilities:
- Define the immutable login configuration (`AuthConfig`).
- Define the opaque Vault session token handed back to callers (`SessionToken`).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """
    Everything the exchange needs to know about one Vault role.

    `uri` is the Vault base address; `resource` is the Entra ID application
    the identity token is requested for.
    """

    uri: str
    role: str
    resource: str
    namespace: str | None = None
    client_id: str | None = None

    @property
    def login_url(self) -> str:
        return f"{self.uri.rstrip('/')}/v1/auth/azure/login"


@dataclass(frozen=True, slots=True)
class SessionToken:
    """
    Vault client token. Opaque to this package.
    """

    value: str = field(repr=False)

    def __str__(self) -> str:
        return "SessionToken(****)"


# --- Module Notes -----------------------------------------------------------
# `SessionToken.value` is excluded from repr so tokens never end up in log lines or tracebacks.
