"""
vault_uami_auth.auth.uami

Vault login with an Azure user-assigned managed identity (UAMI).

Responsibilities:
- Fetch an Entra ID access token from the local managed-identity endpoint.
- Exchange it at Vault's `azure` auth method for a client token.
- Classify every failure by stage (`ENV_MISSING`, `IDENTITY_TOKEN`, `SESSION_TOKEN`).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import httpx
import jwt
import structlog

from vault_uami_auth.auth.errors import AuthenticationError, AuthStage
from vault_uami_auth.auth.models import AuthConfig, SessionToken
from vault_uami_auth.observability.logging import get_logger

log = get_logger(__name__)

# App Service / Functions managed-identity contract.
IDENTITY_ENDPOINT_ENV = "IDENTITY_ENDPOINT"
IDENTITY_HEADER_ENV = "IDENTITY_HEADER"
IDENTITY_HEADER_NAME = "X-IDENTITY-HEADER"
IDENTITY_API_VERSION = "2019-08-01"

NAMESPACE_HEADER = "X-Vault-Namespace"

_DIAGNOSTIC_CLAIMS = ("aud", "oid", "xms_mirid", "exp")


class UamiAuthenticator:
    """
    Two-call exchange: managed-identity token -> Vault client token.

    One attempt per `authenticate()` call; retry policy belongs to the caller.
    The `http` client is shared and owned by the caller.
    """

    def __init__(
        self,
        *,
        config: AuthConfig,
        http: httpx.Client,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._http = http
        self._environ = environ if environ is not None else os.environ

    @property
    def config(self) -> AuthConfig:
        return self._config

    def authenticate(self) -> SessionToken:
        with structlog.contextvars.bound_contextvars(
            vault_role=self._config.role,
            vault_uri=self._config.uri,
        ):
            log.info("vault_login_started")
            try:
                endpoint, secret = self._identity_environment()
                access_token = self._fetch_identity_token(endpoint=endpoint, secret=secret)
                client_token = self._fetch_session_token(access_token=access_token)
            except AuthenticationError as e:
                log.error("vault_login_failed", stage=e.stage.value, error=str(e))
                raise
            log.info("vault_login_succeeded")
            return SessionToken(client_token)

    def _identity_environment(self) -> tuple[str, str]:
        endpoint = self._environ.get(IDENTITY_ENDPOINT_ENV) or ""
        secret = self._environ.get(IDENTITY_HEADER_ENV) or ""
        missing = [
            name
            for name, value in ((IDENTITY_ENDPOINT_ENV, endpoint), (IDENTITY_HEADER_ENV, secret))
            if not value.strip()
        ]
        if missing:
            raise AuthenticationError(
                f"Managed identity environment not set: {', '.join(missing)}",
                stage=AuthStage.ENV_MISSING,
            )
        return endpoint, secret

    def _fetch_identity_token(self, *, endpoint: str, secret: str) -> str:
        params = {"resource": self._config.resource, "api-version": IDENTITY_API_VERSION}
        if self._config.client_id:
            params["client_id"] = self._config.client_id

        try:
            r = self._http.get(
                endpoint,
                params=params,
                headers={IDENTITY_HEADER_NAME: secret, "Accept": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AuthenticationError(
                f"Failed to retrieve access token: {type(e).__name__}: {e}",
                stage=AuthStage.IDENTITY_TOKEN,
                cause=e,
            ) from e
        except UnicodeEncodeError as e:
            raise AuthenticationError(
                f"Failed to retrieve access token: {IDENTITY_HEADER_NAME} value is not ASCII",
                stage=AuthStage.IDENTITY_TOKEN,
                cause=e,
            ) from e

        token = _extract_token(
            r,
            path=("access_token",),
            stage=AuthStage.IDENTITY_TOKEN,
            what="access token",
        )
        log.debug("identity_token_acquired", **identity_claims(token))
        return token

    def _fetch_session_token(self, *, access_token: str) -> str:
        headers = {"Accept": "application/json"}
        if self._config.namespace:
            headers[NAMESPACE_HEADER] = self._config.namespace

        try:
            r = self._http.post(
                self._config.login_url,
                headers=headers,
                json={"role": self._config.role, "jwt": access_token},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AuthenticationError(
                f"Failed to authenticate to vault: {type(e).__name__}: {e}",
                stage=AuthStage.SESSION_TOKEN,
                cause=e,
            ) from e
        except UnicodeEncodeError as e:
            raise AuthenticationError(
                f"Failed to authenticate to vault: {NAMESPACE_HEADER} value is not ASCII",
                stage=AuthStage.SESSION_TOKEN,
                cause=e,
            ) from e

        return _extract_token(
            r,
            path=("auth", "client_token"),
            stage=AuthStage.SESSION_TOKEN,
            what="vault client token",
        )


class UamiAuthentication:
    """
    `ClientAuthentication` backed by `UamiAuthenticator`.
    """

    def __init__(self, authenticator: UamiAuthenticator) -> None:
        self._authenticator = authenticator

    def login(self) -> SessionToken:
        return self._authenticator.authenticate()


def identity_claims(token: str) -> dict[str, Any]:
    """
    Selected claims of the identity token, decoded without verification.

    Vault verifies the token; these are only for logs. Returns {} for non-JWT tokens.
    """

    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return {}
    return {k: payload[k] for k in _DIAGNOSTIC_CLAIMS if k in payload}


def _extract_token(
    r: httpx.Response,
    *,
    path: tuple[str, ...],
    stage: AuthStage,
    what: str,
) -> str:
    if not r.is_success:
        raise AuthenticationError(f"Failed to retrieve {what}: HTTP {r.status_code}", stage=stage)
    if not r.content.strip():
        raise AuthenticationError(
            f"Failed to retrieve {what}: empty response body (HTTP {r.status_code})",
            stage=stage,
        )

    try:
        node: Any = r.json()
    except ValueError as e:
        raise AuthenticationError(
            f"Failed to retrieve {what}: response is not valid JSON",
            stage=stage,
            cause=e,
        ) from e

    for key in path:
        node = node.get(key) if isinstance(node, dict) else None
    if not isinstance(node, str) or not node:
        raise AuthenticationError(
            f"Failed to retrieve {what}: response has no '{'.'.join(path)}'",
            stage=stage,
        )
    return node


# --- Module Notes -----------------------------------------------------------
# Error messages carry HTTP status and field names only; response bodies may echo secrets.
# httpx encodes header values as ASCII; a non-ASCII secret or namespace fails while the
# request is built, so the message names the header, never the offending value.
