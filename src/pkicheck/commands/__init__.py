"""Subcommand modules for pkicheck.

Provides register_commands() which uses deferred imports to keep
``pkicheck --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register standalone commands on the root CLI group."""
    from pkicheck.commands.check import check
    from pkicheck.commands.tls import tls

    cli.add_command(check)
    cli.add_command(tls)
