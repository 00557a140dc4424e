"""Tests for PkiRealmBootstrapCheck."""

from __future__ import annotations

import pytest

from pkicheck.domain.errors import SecureSettingsClosedError
from pkicheck.domain.settings import SecureSettings, Settings
from pkicheck.services.pki import PkiRealmBootstrapCheck
from pkicheck.services.tls import LEGACY_SSL_ENABLED_WARNING
from tests.conftest import PKI_REALM, make_settings


def run_check(values: dict[str, object], secure: SecureSettings | None = None) -> bool:
    """Return True when the check fails."""
    return PkiRealmBootstrapCheck().check(make_settings(values, secure=secure)).is_failure


class TestNoPkiRealm:
    def test_empty_settings_pass(self) -> None:
        assert PkiRealmBootstrapCheck().check(Settings.EMPTY).is_failure is False

    @pytest.mark.parametrize(
        "tls",
        [
            {},
            {"ssl.client_authentication": "none"},
            {"transport.ssl.enabled": False, "http.ssl.enabled": False},
        ],
    )
    def test_insecure_tls_passes_without_pki_realm(self, tls: dict[str, object]) -> None:
        settings = {"authc.realms.file1.type": "file", **tls}
        assert run_check(settings) is False

    def test_disabled_realm_passes(self) -> None:
        settings = {
            **PKI_REALM,
            "authc.realms.test_pki.enabled": False,
            "ssl.client_authentication": "none",
        }
        assert run_check(settings) is False


class TestBootstrapScenario:
    def test_pki_realm_walkthrough(self) -> None:
        settings: dict[str, object] = dict(PKI_REALM)
        assert run_check(settings) is True

        # enable transport tls
        settings["transport.ssl.enabled"] = True
        assert run_check(settings) is False

        # disable client auth default
        settings["ssl.client_authentication"] = "none"
        assert run_check(settings) is True

        # enable ssl for http
        settings["http.ssl.enabled"] = True
        assert run_check(settings) is True

        # enable client auth for http
        settings["http.ssl.client_authentication"] = "optional"
        assert run_check(settings) is False

        # disable http ssl
        settings["http.ssl.enabled"] = False
        assert run_check(settings) is True

        # transport.client_authentication is not a TLS key
        settings["transport.client_authentication"] = "required"
        assert run_check(settings) is True

        # transport profile with client auth
        settings["transport.client_authentication"] = "none"
        settings["transport.profiles.foo.ssl.client_authentication"] = "required"
        assert run_check(settings) is False


class TestLayers:
    @pytest.mark.parametrize("auth", ["required", "optional"])
    def test_transport_alone_is_enough(self, auth: str) -> None:
        settings = {
            **PKI_REALM,
            "transport.ssl.enabled": True,
            "transport.ssl.client_authentication": auth,
            "http.ssl.enabled": False,
        }
        assert run_check(settings) is False

    def test_http_alone_is_enough(self) -> None:
        settings = {
            **PKI_REALM,
            "http.ssl.enabled": True,
            "http.ssl.client_authentication": "required",
        }
        assert run_check(settings) is False

    def test_disabling_http_ssl_fails_without_transport(self) -> None:
        settings: dict[str, object] = {
            **PKI_REALM,
            "http.ssl.enabled": True,
            "http.ssl.client_authentication": "required",
        }
        assert run_check(settings) is False
        settings["http.ssl.enabled"] = False
        assert run_check(settings) is True

    def test_disabling_realm_flips_failure(self) -> None:
        settings: dict[str, object] = dict(PKI_REALM)
        assert run_check(settings) is True
        settings["authc.realms.test_pki.enabled"] = False
        assert run_check(settings) is False

    def test_profile_with_explicit_ssl(self) -> None:
        settings = {
            **PKI_REALM,
            "transport.ssl.client_authentication": "none",
            "transport.profiles.client.ssl.enabled": True,
            "transport.profiles.client.ssl.client_authentication": "required",
        }
        assert run_check(settings) is False

    def test_profile_without_ssl_still_fails(self) -> None:
        settings = {
            **PKI_REALM,
            "transport.ssl.client_authentication": "none",
            "transport.profiles.client.ssl.client_authentication": "required",
        }
        assert run_check(settings) is True


class TestFailureReason:
    def test_reason_names_realms_and_remedy(self) -> None:
        settings = make_settings(
            {**PKI_REALM, "authc.realms.another.type": "pki"}
        )
        result = PkiRealmBootstrapCheck().check(settings)
        assert result.is_failure
        assert result.reason is not None
        assert "[another, test_pki]" in result.reason
        assert "client_authentication" in result.reason

    def test_success_has_no_reason(self) -> None:
        result = PkiRealmBootstrapCheck().check(Settings.EMPTY)
        assert result.reason is None


class TestClosedSecureSettings:
    @pytest.mark.parametrize("auth", ["none", "optional"])
    def test_closed_keystore_password_raises(self, auth: str) -> None:
        secure = SecureSettings({"http.ssl.keystore.secure_password": "testnode"})
        settings = make_settings(
            {
                **PKI_REALM,
                "http.ssl.enabled": True,
                "http.ssl.client_authentication": auth,
                "http.ssl.keystore.path": "testnode.jks",
            },
            secure=secure,
        )
        check = PkiRealmBootstrapCheck()
        secure.close()
        with pytest.raises(SecureSettingsClosedError):
            check.check(settings)

    def test_closed_store_raises_even_when_transport_passes(self) -> None:
        secure = SecureSettings({"http.ssl.keystore.secure_password": "testnode"})
        settings = make_settings(
            {**PKI_REALM, "transport.ssl.enabled": True, "http.ssl.enabled": True},
            secure=secure,
        )
        secure.close()
        with pytest.raises(SecureSettingsClosedError):
            PkiRealmBootstrapCheck().check(settings)

    def test_open_store_is_read_normally(self) -> None:
        secure = SecureSettings({"http.ssl.keystore.secure_password": "testnode"})
        settings = {
            **PKI_REALM,
            "http.ssl.enabled": True,
            "http.ssl.client_authentication": "optional",
        }
        assert run_check(settings, secure=secure) is False

    def test_closed_profile_keystore_raises_when_default_passes(self) -> None:
        secure = SecureSettings({"transport.profiles.foo.ssl.keystore.secure_password": "x"})
        settings = make_settings(
            {
                **PKI_REALM,
                "transport.ssl.enabled": True,
                "transport.profiles.foo.port": 9400,
            },
            secure=secure,
        )
        secure.close()
        with pytest.raises(SecureSettingsClosedError):
            PkiRealmBootstrapCheck().check(settings)

    def test_closed_transport_keystore_raises_when_transport_passes(self) -> None:
        secure = SecureSettings({"transport.ssl.keystore.secure_password": "testnode"})
        settings = make_settings(
            {
                **PKI_REALM,
                "transport.ssl.enabled": True,
                "transport.ssl.keystore.path": "testnode.jks",
            },
            secure=secure,
        )
        secure.close()
        with pytest.raises(SecureSettingsClosedError):
            PkiRealmBootstrapCheck().check(settings)


class TestDeprecations:
    def test_legacy_toggle_is_reported(self) -> None:
        result = PkiRealmBootstrapCheck().check(make_settings({**PKI_REALM, "ssl.enabled": True}))
        assert result.is_failure is False
        assert result.warnings == [LEGACY_SSL_ENABLED_WARNING]

    def test_legacy_toggle_reported_on_failure(self) -> None:
        settings = make_settings(
            {**PKI_REALM, "ssl.enabled": True, "ssl.client_authentication": "none"}
        )
        result = PkiRealmBootstrapCheck().check(settings)
        assert result.is_failure is True
        assert result.warnings == [LEGACY_SSL_ENABLED_WARNING]

    def test_no_warning_when_layer_key_set(self) -> None:
        settings = make_settings(
            {**PKI_REALM, "ssl.enabled": True, "transport.ssl.enabled": True}
        )
        assert PkiRealmBootstrapCheck().check(settings).warnings == []
