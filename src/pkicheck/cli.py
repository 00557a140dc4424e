"""Root CLI group for pkicheck with global flags and command registration."""

from __future__ import annotations

import click

from pkicheck import __version__
from pkicheck.commands import register_commands
from pkicheck.commands._context import AppContext
from pkicheck.config.settings import CheckSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pkicheck")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Node configuration file.")
@click.option(
    "--secure-file",
    "secure_path",
    default=None,
    help="TOML file with secure setting values (keystore passwords).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    secure_path: str | None,
) -> None:
    """pkicheck — validate PKI realm and TLS client-authentication settings."""
    settings = CheckSettings.from_cli(
        config_path=config_path,
        secure_path=secure_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
