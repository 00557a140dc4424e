"""Command: run bootstrap checks against the node configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkicheck.commands._base import PkiCommand

if TYPE_CHECKING:
    from pkicheck.commands._context import AppContext


@click.command(
    cls=PkiCommand,
    examples="""\
  pkicheck check
  pkicheck --config /etc/node/node.toml check
  pkicheck --secure-file secure.toml check
  pkicheck --json check
  pkicheck check --only pki_realm""",
)
@click.option(
    "--only",
    "only",
    multiple=True,
    help="Run only the named check (repeatable).",
)
@click.pass_obj
def check(app: AppContext, only: tuple[str, ...]) -> None:
    """Run bootstrap checks; exit 1 if any check fails."""
    from pkicheck.plugins.manager import PluginManager
    from pkicheck.services.bootstrap import BootstrapChecks

    checks = BootstrapChecks.from_plugins(PluginManager())
    if only:
        unknown = sorted(set(only) - set(checks.names))
        if unknown:
            msg = f"Unknown check(s): {', '.join(unknown)}. Available: {', '.join(checks.names)}"
            raise click.UsageError(msg)
        checks = checks.select(only)

    secure = app.node_settings.secure
    try:
        result = app.run("check", checks.run)
    finally:
        # Secure values are only needed while the checks run.
        if secure is not None:
            secure.close()
    app.emit(result)
