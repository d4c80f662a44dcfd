"""
vault_uami_auth.config

Build the immutable `AuthConfig` from settings or a profile YAML file.

Responsibilities:
- Read `application-<profile>.yml` and bind its `vault.uami` section.
- Fall back to env-provided settings fields.
- Reject incomplete configuration with `ConfigurationError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from vault_uami_auth.auth.errors import ConfigurationError
from vault_uami_auth.auth.models import AuthConfig
from vault_uami_auth.settings import Settings

_REQUIRED = ("uri", "role", "resource")

# YAML key -> AuthConfig field
_YAML_KEYS = {
    "uri": "uri",
    "namespace": "namespace",
    "role": "role",
    "resource": "resource",
    "client-id": "client_id",
}


def profile_path(config_dir: Path, profile: str) -> Path:
    return config_dir / f"application-{profile}.yml"


def load_profile_section(path: Path) -> dict[str, str | None]:
    try:
        with path.open(encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{path} is not valid UTF-8") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    vault = doc.get("vault") if isinstance(doc, dict) else None
    uami = vault.get("uami") if isinstance(vault, dict) else None
    if not isinstance(uami, dict):
        raise ConfigurationError(f"Missing 'vault.uami' section in {path.name}")

    return {field: _scalar(uami.get(key)) for key, field in _YAML_KEYS.items()}


def build_auth_config(settings: Settings) -> AuthConfig:
    values: dict[str, str | None] = {
        "uri": settings.uri,
        "namespace": settings.namespace,
        "role": settings.role,
        "resource": settings.resource,
        "client_id": settings.client_id,
    }
    if settings.config_dir is not None:
        section = load_profile_section(profile_path(settings.config_dir, settings.env))
        values.update({k: v for k, v in section.items() if v is not None})

    missing = [k for k in _REQUIRED if not values.get(k)]
    if missing:
        raise ConfigurationError(f"Missing vault.uami settings: {', '.join(missing)}")

    return AuthConfig(
        uri=values["uri"],  # type: ignore[arg-type]
        role=values["role"],  # type: ignore[arg-type]
        resource=values["resource"],  # type: ignore[arg-type]
        namespace=values["namespace"] or None,
        client_id=values["client_id"] or None,
    )


def _scalar(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


# --- Module Notes -----------------------------------------------------------
# Empty strings for the optional keys (namespace, client-id) mean "not configured".
