"""Built-in plugin contributing the PKI realm bootstrap check."""

from __future__ import annotations

import pluggy

from pkicheck.services.pki import PkiRealmBootstrapCheck

hookimpl = pluggy.HookimplMarker("pkicheck")


class PkiRealmPlugin:
    """Registers :class:`PkiRealmBootstrapCheck`."""

    @hookimpl
    def pkicheck_bootstrap_checks(self) -> list[PkiRealmBootstrapCheck]:
        return [PkiRealmBootstrapCheck()]
