"""
tests.test_cli

`vault-uami-login` entrypoint: exit codes and stdout/stderr contract.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from conftest import IDENTITY_ENDPOINT, IDENTITY_SECRET
from vault_uami_auth import __main__ as cli
from vault_uami_auth import bootstrap
from vault_uami_auth.settings import get_settings


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("VAULT_UAMI_URI", "https://vault.example.net")
    monkeypatch.setenv("VAULT_UAMI_ROLE", "vault-role")
    monkeypatch.setenv("VAULT_UAMI_RESOURCE", "vault-resource-id")
    monkeypatch.delenv("VAULT_UAMI_CONFIG_DIR", raising=False)
    monkeypatch.setenv("IDENTITY_ENDPOINT", IDENTITY_ENDPOINT)
    monkeypatch.setenv("IDENTITY_HEADER", IDENTITY_SECRET)
    monkeypatch.delenv("VAULT_UAMI_CONNECT_TIMEOUT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    # main() points the root logger at the captured stderr; detach it after the test.
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


def _patch_transport(monkeypatch: pytest.MonkeyPatch, spy) -> None:
    monkeypatch.setattr(bootstrap, "build_transport", lambda options: spy.client())


def test_prints_token_on_success(monkeypatch, capsys, spy_factory) -> None:
    spy = spy_factory(
        identity=(200, {"access_token": "id-token"}),
        vault=(200, {"auth": {"client_token": "s.cli-token"}}),
    )
    _patch_transport(monkeypatch, spy)

    assert cli.main(["--profile", "test"]) == 0

    out, err = capsys.readouterr()
    assert out == "s.cli-token\n"
    assert "s.cli-token" not in err


def test_reports_stage_on_failure(monkeypatch, capsys, spy_factory) -> None:
    spy = spy_factory(identity=(500, None))
    _patch_transport(monkeypatch, spy)

    assert cli.main([]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert "[IDENTITY_TOKEN]" in err


def test_reports_missing_environment(monkeypatch, capsys, spy_factory) -> None:
    monkeypatch.delenv("IDENTITY_HEADER")
    spy = spy_factory()
    _patch_transport(monkeypatch, spy)

    assert cli.main([]) == 1

    _, err = capsys.readouterr()
    assert "[ENV_MISSING]" in err
    assert spy.requests == []


def test_reports_configuration_error(monkeypatch, capsys) -> None:
    monkeypatch.delenv("VAULT_UAMI_ROLE")

    assert cli.main([]) == 1

    _, err = capsys.readouterr()
    assert "role" in err


def test_uses_cached_settings_without_overrides(monkeypatch, capsys, spy_factory) -> None:
    spy = spy_factory(
        identity=(200, {"access_token": "id-token"}),
        vault=(200, {"auth": {"client_token": "s.cli-token"}}),
    )
    _patch_transport(monkeypatch, spy)

    assert cli.main([]) == 0

    assert get_settings.cache_info().currsize == 1
    assert get_settings().role == "vault-role"
    assert str(spy.vault_calls[0].url) == "https://vault.example.net/v1/auth/azure/login"


def test_reports_invalid_setting_value(monkeypatch, capsys) -> None:
    monkeypatch.setenv("VAULT_UAMI_CONNECT_TIMEOUT", "abc")

    assert cli.main([]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("vault-uami-login: Invalid VAULT_UAMI_* settings: connect_timeout")
    assert "abc" not in err


def test_reports_profile_file_that_is_not_utf8(monkeypatch, capsys, tmp_path) -> None:
    (tmp_path / "application-test.yml").write_bytes(b"vault:\n  uami:\n    role: \xff\xfe\n")

    assert cli.main(["--profile", "test", "--config-dir", str(tmp_path)]) == 1

    _, err = capsys.readouterr()
    assert "not valid UTF-8" in err


# --- Module Notes -----------------------------------------------------------
# Logs share stderr with error messages; stdout carries only the token.
