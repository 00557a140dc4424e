"""PkiRealmBootstrapCheck — refuse to start a PKI realm without client-cert TLS.

A PKI realm authenticates callers by their TLS client certificate. If no
listener both encrypts traffic and asks peers for a certificate, the realm
can never authenticate anyone, so startup is vetoed.
"""

from __future__ import annotations

import logging

from pkicheck.domain.settings import Settings
from pkicheck.domain.types import NetworkLayer
from pkicheck.services.realms import RealmCatalog
from pkicheck.services.result import BootstrapCheckResult
from pkicheck.services.tls import TlsProfileResolver

logger = logging.getLogger(__name__)


class PkiRealmBootstrapCheck:
    """Fails when enabled PKI realms have no client-certificate TLS listener."""

    name = "pki_realm"

    def __init__(
        self,
        realms: RealmCatalog | None = None,
        resolver: TlsProfileResolver | None = None,
    ) -> None:
        self._realms = realms or RealmCatalog()
        self._resolver = resolver or TlsProfileResolver()

    def check(self, settings: Settings) -> BootstrapCheckResult:
        pki_realms = self._realms.enabled_pki_realms(settings)
        if not pki_realms:
            return BootstrapCheckResult.success()

        # Both layers and every transport profile are resolved so a
        # settings-read error surfaces even when an earlier listener passes.
        transport_ok = self._resolver.requires_client_cert_auth(settings, NetworkLayer.TRANSPORT)
        http_ok = self._resolver.requires_client_cert_auth(settings, NetworkLayer.HTTP)
        logger.debug(
            "PKI realms %s: transport_ok=%s http_ok=%s",
            sorted(r.name for r in pki_realms),
            transport_ok,
            http_ok,
        )

        warnings = self._resolver.deprecations(settings)
        if transport_ok or http_ok:
            return BootstrapCheckResult.success(warnings)
        return BootstrapCheckResult.failure(
            self._failure_reason(sorted(r.name for r in pki_realms)), warnings
        )

    @staticmethod
    def _failure_reason(realm_names: list[str]) -> str:
        names = ", ".join(realm_names)
        return (
            f"a PKI realm is enabled [{names}] but no TLS listener requests client "
            "certificates; PKI authentication requires [transport.ssl.enabled] or "
            "[http.ssl.enabled] to be true with [client_authentication] set to "
            "[required] or [optional] on the same layer or on a transport profile"
        )
