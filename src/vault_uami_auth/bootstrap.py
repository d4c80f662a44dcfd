"""
vault_uami_auth.bootstrap

Composition root for process bootstrap.

Responsibilities:
- Build the transport once and inject it into the authenticator.
- Hand callers a `ClientAuthentication` without any global registry.
- Offer an async wrapper for callers running inside an event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from vault_uami_auth.auth.base import ClientAuthentication
from vault_uami_auth.auth.models import SessionToken
from vault_uami_auth.auth.uami import UamiAuthentication, UamiAuthenticator
from vault_uami_auth.config import build_auth_config
from vault_uami_auth.observability.logging import get_logger
from vault_uami_auth.settings import Settings
from vault_uami_auth.transport import build_transport

log = get_logger(__name__)


def create_client_authentication(
    *,
    settings: Settings,
    http: httpx.Client,
) -> ClientAuthentication:
    config = build_auth_config(settings)
    log.info(
        "client_authentication_created",
        env=settings.env,
        mechanism="azure_uami",
        vault_role=config.role,
    )
    return UamiAuthentication(UamiAuthenticator(config=config, http=http))


@contextmanager
def vault_login_session(settings: Settings) -> Iterator[ClientAuthentication]:
    """
    Scope the pooled transport to the bootstrap phase.

    Configuration is validated before the pool is allocated, so a bad config
    never leaves an open client behind.
    """

    config = build_auth_config(settings)
    http = build_transport(settings.transport_options())
    try:
        yield UamiAuthentication(UamiAuthenticator(config=config, http=http))
    finally:
        http.close()


async def login_async(auth: ClientAuthentication) -> SessionToken:
    # login() blocks on two HTTP round trips; keep it off the event loop.
    return await asyncio.to_thread(auth.login)


# --- Module Notes -----------------------------------------------------------
# Frameworks that fetch several secrets in parallel can share one `http` client
# across `create_client_authentication` calls; the pool is thread-safe.
