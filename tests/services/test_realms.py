"""Tests for RealmCatalog."""

from __future__ import annotations

import pytest

from pkicheck.domain.errors import InvalidSettingError
from pkicheck.domain.settings import Settings
from pkicheck.services.realms import RealmCatalog
from tests.conftest import make_settings


class TestRealmCatalog:
    def test_empty_settings(self) -> None:
        assert RealmCatalog().enabled_pki_realms(Settings.EMPTY) == frozenset()

    def test_pki_realm_enabled_by_default(self) -> None:
        settings = make_settings({"authc.realms.test_pki.type": "pki"})
        realms = RealmCatalog().enabled_pki_realms(settings)
        assert [r.name for r in realms] == ["test_pki"]

    def test_disabled_pki_realm_excluded(self) -> None:
        settings = make_settings(
            {"authc.realms.test_pki.type": "pki", "authc.realms.test_pki.enabled": False}
        )
        assert RealmCatalog().enabled_pki_realms(settings) == frozenset()

    def test_other_realm_types_excluded(self) -> None:
        settings = make_settings(
            {
                "authc.realms.file1.type": "file",
                "authc.realms.ldap1.type": "ldap",
                "authc.realms.pki1.type": "pki",
            }
        )
        assert {r.name for r in RealmCatalog().enabled_pki_realms(settings)} == {"pki1"}

    def test_realms_lists_all_sorted(self) -> None:
        settings = make_settings(
            {
                "authc.realms.zeta.type": "pki",
                "authc.realms.alpha.type": "file",
                "authc.realms.alpha.enabled": False,
                "authc.realms.untyped.order": 3,
            }
        )
        realms = RealmCatalog().realms(settings)
        assert [(r.name, r.type, r.enabled) for r in realms] == [
            ("alpha", "file", False),
            ("zeta", "pki", True),
        ]

    def test_invalid_enabled_flag_raises(self) -> None:
        settings = make_settings(
            {"authc.realms.test_pki.type": "pki", "authc.realms.test_pki.enabled": "maybe"}
        )
        with pytest.raises(InvalidSettingError, match=r"authc\.realms\.test_pki\.enabled"):
            RealmCatalog().enabled_pki_realms(settings)

    def test_realm_type_is_case_insensitive(self) -> None:
        settings = make_settings({"authc.realms.upper.type": " PKI "})
        realms = RealmCatalog().enabled_pki_realms(settings)
        assert [(r.name, r.type) for r in realms] == [("upper", "pki")]
