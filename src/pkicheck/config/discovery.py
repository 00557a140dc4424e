"""Node configuration discovery and loading.

Walk-up finder locates node.toml, similar to how git finds .git/.
Supports PKICHECK_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from pkicheck.domain.settings import SecureSettings, Settings, flatten

CONFIG_FILENAME = "node.toml"
CONFIG_ENV_VAR = "PKICHECK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for node.toml.

    Returns the path to the config file, or None if not found.
    Checks PKICHECK_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


def load_secure_settings(path: Path) -> SecureSettings:
    """Load secure values from a TOML file into an in-memory store."""
    return SecureSettings(flatten(_read_toml(path)))


def load_settings(
    path: Path | None = None,
    *,
    secure_path: Path | None = None,
    cwd: Path | None = None,
) -> Settings:
    """Load the node settings snapshot.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns empty settings if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    secure = load_secure_settings(secure_path) if secure_path is not None else None
    if path is None:
        return Settings(secure=secure)
    return Settings.from_mapping(_read_toml(path), secure=secure)
