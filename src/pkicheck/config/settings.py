"""Unified tool settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PKICHECK_*`` prefix
  3. Code defaults

The node configuration itself is not part of these settings; it is located
through :mod:`pkicheck.config.discovery` and loaded as a
:class:`~pkicheck.domain.settings.Settings` snapshot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pkicheck.config.discovery import find_config


class CheckSettings(BaseSettings):
    """Settings for a pkicheck invocation.

    Attributes:
        config_path: Node configuration file, or None when none was found.
        secure_path: Optional TOML file holding secure setting values.
        work_dir: Directory the node configuration walk-up starts from.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PKICHECK_",
    }

    work_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    secure_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI flags, then env vars; no dotenv or secrets-dir sources."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        secure_path: str | None = None,
        work_dir: Path | None = None,
        **cli_flags: Any,
    ) -> CheckSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* wins; otherwise ``node.toml`` is discovered
        by walking up from *work_dir*.
        """
        overrides: dict[str, Any] = dict(cli_flags)
        resolved_dir = work_dir or Path.cwd()
        overrides["work_dir"] = resolved_dir

        if config_path:
            overrides["config_path"] = Path(config_path)
        else:
            discovered = find_config(resolved_dir)
            if discovered is not None:
                overrides["config_path"] = discovered

        if secure_path:
            overrides["secure_path"] = Path(secure_path)

        return cls(**overrides)
