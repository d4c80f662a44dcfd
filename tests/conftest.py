"""
tests.conftest

Shared fixtures for login-exchange tests.

Responsibilities:
- Provide a canonical `AuthConfig` and managed-identity environment.
- Provide a spy HTTP transport that records requests and replays canned responses.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from vault_uami_auth.auth.models import AuthConfig

IDENTITY_ENDPOINT = "http://localhost:42356/msi/token"
IDENTITY_SECRET = "identity-header-secret"

Reply = tuple[int, Any] | Exception


class SpyTransport:
    """
    Routes GET -> identity reply, POST -> vault reply, and records every request.

    A reply is `(status, body)` where body is a dict (JSON), str/bytes (raw) or None,
    or an exception instance to raise as a transport failure.
    """

    def __init__(self, *, identity: Reply | None = None, vault: Reply | None = None) -> None:
        self.identity = identity
        self.vault = vault
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.identity if request.method == "GET" else self.vault
        if reply is None:
            raise AssertionError(f"unexpected {request.method} {request.url}")
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        if isinstance(body, dict):
            return httpx.Response(status, json=body)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=body or b"")

    @property
    def identity_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def vault_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        uri="https://vault.example.net",
        namespace="vault-namespace",
        role="vault-role",
        resource="vault-resource-id",
        client_id="vault-client-id",
    )


@pytest.fixture
def identity_env() -> dict[str, str]:
    return {"IDENTITY_ENDPOINT": IDENTITY_ENDPOINT, "IDENTITY_HEADER": IDENTITY_SECRET}


@pytest.fixture
def spy_factory() -> Callable[..., SpyTransport]:
    def _make(**kwargs: Any) -> SpyTransport:
        return SpyTransport(**kwargs)

    return _make


# --- Module Notes -----------------------------------------------------------
# Spies build a fresh httpx.Response per request so repeated logins see identical replies.
