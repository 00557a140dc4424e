"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text and tables) or machines
(--json). Rendering is done into a string so callers decide where it goes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.markup import escape
from rich.table import Table

from pkicheck.output.console import create_console, get_output, yes_no

if TYPE_CHECKING:
    from rich.console import Console

    from pkicheck.services.result import ServiceResult


class OutputSettings(BaseModel):
    """How a ServiceResult should be rendered."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _render_data(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value) if value else "-"
        console.print(f"  [pki.key]{key}:[/pki.key] {escape(str(value))}", soft_wrap=True)


def _render_tls(console: Console, data: dict[str, Any]) -> None:
    table = Table(title="TLS listeners")
    table.add_column("layer")
    table.add_column("profile")
    table.add_column("ssl")
    table.add_column("client auth")
    table.add_column("client certs")
    for row in data.get("listeners", []):
        table.add_row(
            row["layer"],
            escape(row["profile"]),
            yes_no(row["ssl_enabled"]),
            row["client_auth"],
            yes_no(row["accepts_client_certificates"]),
        )
    console.print(table)

    pki_realms = data.get("pki_realms", [])
    if pki_realms:
        console.print(f"  [pki.key]pki realms:[/pki.key] {escape(', '.join(pki_realms))}")
    else:
        console.print("  [pki.key]pki realms:[/pki.key] none enabled")


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(f"[pki.ok]OK[/pki.ok]: [pki.op]{result.op}[/pki.op]")
        if not settings.quiet:
            if result.op == "tls":
                _render_tls(console, result.data)
            elif result.data:
                _render_data(console, result.data)
        return get_output(console).rstrip("\n")

    error_msg = result.error.message if result.error else "Unknown error"
    console.print(
        f"[pki.error]ERROR[/pki.error]: [pki.op]{result.op}[/pki.op] - {escape(error_msg)}"
    )
    for failure in result.data.get("failures", []):
        console.print(
            f"  [pki.check]\\[{escape(failure['check'])}][/pki.check] {escape(failure['reason'])}",
            soft_wrap=True,
        )
    return get_output(console).rstrip("\n")
