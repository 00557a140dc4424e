"""RealmCatalog — enumerate configured authentication realms."""

from __future__ import annotations

import logging

from pkicheck.domain.settings import Settings
from pkicheck.domain.types import RealmConfig

REALMS_PREFIX = "authc.realms."

logger = logging.getLogger(__name__)


class RealmCatalog:
    """Reads realm definitions from ``authc.realms.<name>.*``."""

    def realms(self, settings: Settings) -> list[RealmConfig]:
        """Every configured realm, sorted by name.

        A group without a ``type`` key is not a realm definition and is skipped.
        """
        found: list[RealmConfig] = []
        for name, realm_settings in settings.get_groups(REALMS_PREFIX).items():
            realm_type = realm_settings.get("type")
            if realm_type is None:
                logger.debug("Skipping realm %s: no type configured", name)
                continue
            found.append(
                RealmConfig(
                    name=name,
                    type=realm_type.strip().lower(),
                    enabled=settings.get_as_bool(f"{REALMS_PREFIX}{name}.enabled", True),
                )
            )
        return found

    def enabled_pki_realms(self, settings: Settings) -> frozenset[RealmConfig]:
        """Realms of type ``pki`` whose ``enabled`` flag is true or unset."""
        return frozenset(r for r in self.realms(settings) if r.is_pki and r.enabled)
