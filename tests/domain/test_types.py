"""Tests for client-auth parsing and TLS value objects."""

from __future__ import annotations

import pytest

from pkicheck.domain.errors import InvalidSettingError
from pkicheck.domain.types import (
    ClientAuth,
    NetworkLayer,
    ProfileOverride,
    RealmConfig,
    TlsLayerConfig,
)


class TestClientAuth:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("required", ClientAuth.REQUIRED), ("Optional", ClientAuth.OPTIONAL), ("NONE", ClientAuth.NONE)],
    )
    def test_parse(self, raw: str, expected: ClientAuth) -> None:
        assert ClientAuth.parse("k", raw) is expected

    def test_parse_invalid(self) -> None:
        with pytest.raises(InvalidSettingError, match="client_authentication"):
            ClientAuth.parse("http.ssl.client_authentication", "sometimes")

    def test_requests_certificate(self) -> None:
        assert ClientAuth.REQUIRED.requests_certificate
        assert ClientAuth.OPTIONAL.requests_certificate
        assert not ClientAuth.NONE.requests_certificate


class TestRealmConfig:
    def test_enabled_by_default(self) -> None:
        assert RealmConfig(name="r", type="pki").enabled is True

    def test_is_pki(self) -> None:
        assert RealmConfig(name="r", type="pki").is_pki
        assert not RealmConfig(name="r", type="file").is_pki

    def test_frozen(self) -> None:
        realm = RealmConfig(name="r", type="pki")
        with pytest.raises(Exception):
            realm.enabled = False  # type: ignore[misc]


class TestTlsLayerConfig:
    def _base(self, **kwargs: object) -> TlsLayerConfig:
        values: dict[str, object] = {
            "layer": NetworkLayer.TRANSPORT,
            "ssl_enabled": True,
            "client_auth": ClientAuth.NONE,
        }
        values.update(kwargs)
        return TlsLayerConfig.model_validate(values)

    def test_accepts_client_certificates(self) -> None:
        assert self._base(client_auth=ClientAuth.OPTIONAL).accepts_client_certificates
        assert not self._base().accepts_client_certificates
        assert not self._base(
            ssl_enabled=False, client_auth=ClientAuth.REQUIRED
        ).accepts_client_certificates

    def test_apply_inherits_missing_values(self) -> None:
        config = self._base().apply(ProfileOverride(name="foo", client_auth=ClientAuth.REQUIRED))
        assert config.profile == "foo"
        assert config.ssl_enabled is True
        assert config.client_auth is ClientAuth.REQUIRED

    def test_apply_replaces_ssl_enabled(self) -> None:
        base = self._base(client_auth=ClientAuth.REQUIRED)
        config = base.apply(ProfileOverride(name="internal", ssl_enabled=False))
        assert config.ssl_enabled is False
        assert config.client_auth is ClientAuth.REQUIRED
        assert base.profile == "default"
