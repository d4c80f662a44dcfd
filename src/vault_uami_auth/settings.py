"""
vault_uami_auth.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the login bootstrap.
- Derive transport options (trust policy, timeouts, pool limits) once per process.
- Offer a cached settings instance for callers that don't build their own.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vault_uami_auth.auth.errors import ConfigurationError
from vault_uami_auth.transport import TransportOptions, TrustPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VAULT_UAMI_", case_sensitive=False)

    # Profile selects the TLS trust policy and the profile YAML file.
    env: Literal["dev", "test", "prod"] = "prod"
    service_name: str = "vault-uami-auth"
    log_level: str = "INFO"

    # Vault / managed identity
    uri: str | None = None
    namespace: str | None = None
    role: str | None = None
    resource: str | None = None
    client_id: str | None = Field(default=None, repr=False)

    # Directory holding `application-<env>.yml`; overrides the fields above when set.
    config_dir: Path | None = None

    # Transport
    trust_policy: TrustPolicy | None = None
    ca_bundle: Path | None = None
    connect_timeout: float = Field(default=5.0, gt=0)
    read_timeout: float = Field(default=10.0, gt=0)
    max_connections: int = Field(default=10, ge=1)
    max_keepalive_connections: int = Field(default=5, ge=0)

    def effective_trust_policy(self) -> TrustPolicy:
        return self.trust_policy or TrustPolicy.for_profile(self.env)

    def transport_options(self) -> TransportOptions:
        return TransportOptions(
            trust_policy=self.effective_trust_policy(),
            ca_bundle=self.ca_bundle,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive_connections,
        )


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from env plus explicit overrides.

    Validation errors name the offending fields but never echo their values.
    """

    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ConfigurationError(f"Invalid VAULT_UAMI_* settings: {fields}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-reading the environment for every caller in one process.
    return load_settings()


# --- Module Notes -----------------------------------------------------------
# Identity endpoint values (IDENTITY_ENDPOINT/IDENTITY_HEADER) are platform-injected and
# read by the authenticator itself, not by Settings.
