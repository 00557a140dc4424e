"""Shared pytest fixtures and test helpers for pkicheck tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from pkicheck.domain.settings import SecureSettings, Settings

PKI_REALM = {"authc.realms.test_pki.type": "pki"}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    The CLI installs a stderr handler bound to the runner's capture stream.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkicheck = logging.getLogger("pkicheck")
    pkicheck_level = pkicheck.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkicheck.setLevel(pkicheck_level)


@pytest.fixture
def node_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to an empty temp directory with no PKICHECK_* overrides."""
    for var in ("PKICHECK_CONFIG", "PKICHECK_CONFIG_PATH", "PKICHECK_SECURE_PATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make_settings(
    values: dict[str, object] | None = None,
    *,
    secure: SecureSettings | None = None,
    **extra: object,
) -> Settings:
    """Build a settings snapshot from dotted keys.

    Keyword arguments use ``__`` in place of dots, e.g.
    ``make_settings(transport__ssl__enabled=True)``.
    """
    data: dict[str, object] = dict(values or {})
    data.update({k.replace("__", "."): v for k, v in extra.items()})
    return Settings.from_mapping(data, secure=secure)
