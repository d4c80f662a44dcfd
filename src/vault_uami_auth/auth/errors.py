"""
vault_uami_auth.auth.errors

Error taxonomy for the login exchange.

Responsibilities:
- Tag every failure with the stage it happened in.
- Preserve the original cause for diagnostics.
"""

from __future__ import annotations

import enum


class AuthStage(str, enum.Enum):
    ENV_MISSING = "ENV_MISSING"
    IDENTITY_TOKEN = "IDENTITY_TOKEN"
    SESSION_TOKEN = "SESSION_TOKEN"
    TRANSPORT_CONFIG = "TRANSPORT_CONFIG"


class VaultAuthError(Exception):
    pass


class ConfigurationError(VaultAuthError, ValueError):
    pass


class AuthenticationError(VaultAuthError):
    def __init__(
        self,
        message: str,
        *,
        stage: AuthStage,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(f"[{stage.value}] {message}")
        self.stage = stage
        self.cause = cause


class TransportConfigurationError(AuthenticationError):
    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message, stage=AuthStage.TRANSPORT_CONFIG, cause=cause)


# --- Module Notes -----------------------------------------------------------
# Raise these with `from cause` as well, so both `.cause` and `__cause__` point at the root error.
