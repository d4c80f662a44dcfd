"""
vault_uami_auth.__main__

Entrypoint for `python -m vault_uami_auth` and the `vault-uami-login` script.

Responsibilities:
- Load settings (with optional CLI overrides).
- Perform one Vault login.
- Print the client token on stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from vault_uami_auth.auth.errors import AuthenticationError, ConfigurationError
from vault_uami_auth.bootstrap import vault_login_session
from vault_uami_auth.observability.logging import configure_logging
from vault_uami_auth.settings import get_settings, load_settings


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vault-uami-login",
        description="Log in to Vault with the Azure managed identity and print the client token.",
    )
    p.add_argument("--profile", choices=("dev", "test", "prod"), help="deployment profile")
    p.add_argument("--config-dir", type=Path, help="directory holding application-<profile>.yml")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    overrides: dict[str, object] = {}
    if args.profile:
        overrides["env"] = args.profile
    if args.config_dir:
        overrides["config_dir"] = args.config_dir

    try:
        settings = load_settings(**overrides) if overrides else get_settings()
        configure_logging(
            service_name=settings.service_name,
            level=settings.log_level,
            stream=sys.stderr,
        )
        with vault_login_session(settings) as auth:
            token = auth.login()
    except (AuthenticationError, ConfigurationError) as e:
        print(f"vault-uami-login: {e}", file=sys.stderr)
        return 1

    print(token.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# Typical use: `export VAULT_TOKEN="$(vault-uami-login)"` in a container entrypoint.
