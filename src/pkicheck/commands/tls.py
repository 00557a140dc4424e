"""Command: show resolved TLS listeners and enabled PKI realms."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkicheck.commands._base import PkiCommand

if TYPE_CHECKING:
    from pkicheck.commands._context import AppContext


@click.command(
    cls=PkiCommand,
    examples="""\
  pkicheck tls
  pkicheck --json tls""",
)
@click.pass_obj
def tls(app: AppContext) -> None:
    """Show the effective TLS configuration of every listener."""
    from pkicheck.services.report import TlsReportService

    app.emit(app.run("tls", TlsReportService().describe))
