"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Loads the node settings snapshot lazily and routes
result emission (stdout/stderr + exit codes).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from pkicheck.domain.errors import SettingsError
from pkicheck.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pkicheck.config.settings import CheckSettings
    from pkicheck.domain.settings import Settings
    from pkicheck.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The node settings are loaded on first use so ``--help`` and
    ``--version`` never read configuration files.
    """

    def __init__(self, settings: CheckSettings) -> None:
        self.settings = settings
        self._node_settings: Settings | None = None

        from pkicheck.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def node_settings(self) -> Settings:
        """The node settings snapshot (loaded lazily on first access)."""
        if self._node_settings is None:
            from pkicheck.config.discovery import load_settings

            config_path = self.settings.config_path
            if config_path is not None and not config_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            secure_path = self.settings.secure_path
            if secure_path is not None and not secure_path.is_file():
                msg = f"Secure settings file not found: {secure_path}"
                raise click.ClickException(msg)
            self._node_settings = load_settings(
                config_path,
                secure_path=self.settings.secure_path,
                cwd=self.settings.work_dir,
            )
        return self._node_settings

    def run(self, op: str, func: Callable[[Settings], ServiceResult]) -> ServiceResult:
        """Call *func* with the node settings, turning read errors into CLI errors."""
        try:
            return func(self.node_settings)
        except SettingsError as exc:
            msg = f"{op}: failed to read settings: {exc}"
            raise click.ClickException(msg) from exc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
