"""
vault_uami_auth.auth.base

The login seam handed to bootstrap callers.

Responsibilities:
- Define `ClientAuthentication`: anything that can produce a Vault session token.
- Provide a static-token implementation for environments that inject a token directly.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vault_uami_auth.auth.models import SessionToken


@runtime_checkable
class ClientAuthentication(Protocol):
    def login(self) -> SessionToken:
        """Return a Vault session token or raise `AuthenticationError`."""
        ...


class TokenAuthentication:
    """
    Pre-issued token (e.g. `VAULT_TOKEN` injected by a sidecar).
    """

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self._token = SessionToken(token)

    def login(self) -> SessionToken:
        return self._token


# --- Module Notes -----------------------------------------------------------
# Bootstrap code depends only on `ClientAuthentication`; swapping mechanisms needs no caller change.
