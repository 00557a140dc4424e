"""Pluggy hook specifications for pkicheck bootstrap checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from pkicheck.services.bootstrap import BootstrapCheck

hookspec = pluggy.HookspecMarker("pkicheck")


class PkicheckHookSpec:
    """Hook specifications for the pkicheck plugin system."""

    @hookspec
    def pkicheck_bootstrap_checks(self) -> list[BootstrapCheck] | None:
        """Return bootstrap checks to run before the node starts."""
