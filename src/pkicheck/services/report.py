"""TlsReportService — describe resolved TLS listeners and PKI realms."""

from __future__ import annotations

from typing import Any

from pkicheck.domain.settings import Settings
from pkicheck.domain.types import NetworkLayer, TlsLayerConfig
from pkicheck.services.realms import RealmCatalog
from pkicheck.services.result import ServiceResult
from pkicheck.services.tls import TlsProfileResolver


def _listener_row(config: TlsLayerConfig) -> dict[str, Any]:
    return {
        "layer": config.layer.value,
        "profile": config.profile,
        "ssl_enabled": config.ssl_enabled,
        "client_auth": config.client_auth.value,
        "accepts_client_certificates": config.accepts_client_certificates,
        "keystore_path": config.keystore_path,
    }


class TlsReportService:
    """Read-only view of what the PKI realm check sees."""

    def __init__(
        self,
        realms: RealmCatalog | None = None,
        resolver: TlsProfileResolver | None = None,
    ) -> None:
        self._realms = realms or RealmCatalog()
        self._resolver = resolver or TlsProfileResolver()

    def describe(self, settings: Settings) -> ServiceResult:
        listeners = [
            _listener_row(config)
            for layer in NetworkLayer
            for config in self._resolver.resolve(settings, layer)
        ]
        realms = [r.model_dump(mode="json") for r in self._realms.realms(settings)]
        pki_enabled = sorted(r.name for r in self._realms.enabled_pki_realms(settings))
        return ServiceResult(
            ok=True,
            op="tls",
            data={
                "listeners": listeners,
                "realms": realms,
                "pki_realms": pki_enabled,
            },
            warnings=self._resolver.deprecations(settings),
        )
