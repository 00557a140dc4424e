"""TlsProfileResolver — effective TLS settings per network layer and profile.

Each base value is resolved through an ordered fallback chain of keys ending
in a layer default::

    ssl_enabled   transport: transport.ssl.enabled -> ssl.enabled (legacy) -> false
                  http:      http.ssl.enabled -> false
    client_auth   transport: transport.ssl.client_authentication
                             -> ssl.client_authentication -> required
                  http:      http.ssl.client_authentication
                             -> ssl.client_authentication -> none

Transport profiles (``transport.profiles.<name>.ssl.*``) override
``enabled`` and ``client_authentication`` individually and inherit every
other value from the resolved transport base.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from pkicheck.domain.settings import Settings
from pkicheck.domain.types import (
    DEFAULT_PROFILE,
    ClientAuth,
    NetworkLayer,
    ProfileOverride,
    TlsLayerConfig,
)

LEGACY_SSL_ENABLED = "ssl.enabled"
GLOBAL_CLIENT_AUTH = "ssl.client_authentication"
PROFILES_PREFIX = "transport.profiles."
LEGACY_SSL_ENABLED_WARNING = (
    f"Setting [{LEGACY_SSL_ENABLED}] is deprecated; use [transport.ssl.enabled] instead"
)

_SSL_ENABLED_CHAIN: dict[NetworkLayer, tuple[Sequence[str], bool]] = {
    NetworkLayer.TRANSPORT: (("transport.ssl.enabled", LEGACY_SSL_ENABLED), False),
    NetworkLayer.HTTP: (("http.ssl.enabled",), False),
}

_CLIENT_AUTH_CHAIN: dict[NetworkLayer, tuple[Sequence[str], ClientAuth]] = {
    NetworkLayer.TRANSPORT: (
        ("transport.ssl.client_authentication", GLOBAL_CLIENT_AUTH),
        ClientAuth.REQUIRED,
    ),
    NetworkLayer.HTTP: (
        ("http.ssl.client_authentication", GLOBAL_CLIENT_AUTH),
        ClientAuth.NONE,
    ),
}

logger = logging.getLogger(__name__)


def first_present(settings: Settings, keys: Sequence[str]) -> str | None:
    """Return the first key of *keys* that is set in *settings*."""
    for key in keys:
        if key in settings:
            return key
    return None


def _resolve_bool(settings: Settings, keys: Sequence[str], default: bool) -> bool:
    key = first_present(settings, keys)
    if key is None:
        return default
    if key == LEGACY_SSL_ENABLED:
        logger.warning(LEGACY_SSL_ENABLED_WARNING)
    return settings.get_as_bool(key, default)


def _resolve_client_auth(settings: Settings, keys: Sequence[str], default: ClientAuth) -> ClientAuth:
    key = first_present(settings, keys)
    if key is None:
        return default
    return ClientAuth.parse(key, settings.get(key, ""))


def _keystore_facts(settings: Settings, ssl_prefix: str) -> dict[str, object]:
    """Non-secret keystore facts under *ssl_prefix*.

    The secure password is read, not kept: a released secure store raises
    here instead of looking unconfigured.
    """
    facts: dict[str, object] = {}
    path = settings.get(f"{ssl_prefix}keystore.path")
    if path is not None:
        facts["keystore_path"] = path
    password = settings.get_secure(f"{ssl_prefix}keystore.secure_password")
    if password is not None:
        facts["has_keystore_password"] = bool(password)
    return facts


class TlsProfileResolver:
    """Resolves effective TLS configurations from a settings snapshot."""

    def base_config(self, settings: Settings, layer: NetworkLayer) -> TlsLayerConfig:
        """Layer-level configuration before any profile override."""
        enabled_keys, enabled_default = _SSL_ENABLED_CHAIN[layer]
        auth_keys, auth_default = _CLIENT_AUTH_CHAIN[layer]
        return TlsLayerConfig(
            layer=layer,
            profile=DEFAULT_PROFILE,
            ssl_enabled=_resolve_bool(settings, enabled_keys, enabled_default),
            client_auth=_resolve_client_auth(settings, auth_keys, auth_default),
            **_keystore_facts(settings, f"{layer.value}.ssl."),
        )

    def profile_overrides(self, settings: Settings) -> list[ProfileOverride]:
        """Transport profile overrides, sorted by profile name."""
        overrides: list[ProfileOverride] = []
        for name in settings.get_groups(PROFILES_PREFIX):
            prefix = f"{PROFILES_PREFIX}{name}.ssl."
            enabled_key = f"{prefix}enabled"
            auth_key = f"{prefix}client_authentication"
            overrides.append(
                ProfileOverride(
                    name=name,
                    ssl_enabled=(
                        settings.get_as_bool(enabled_key, False)
                        if enabled_key in settings
                        else None
                    ),
                    client_auth=(
                        ClientAuth.parse(auth_key, settings.get(auth_key, ""))
                        if auth_key in settings
                        else None
                    ),
                )
            )
        return overrides

    def iter_configs(self, settings: Settings, layer: NetworkLayer) -> Iterator[TlsLayerConfig]:
        """Yield the default profile, then every named transport profile.

        ``transport.profiles.default`` adjusts the default profile itself;
        other profiles inherit from the layer base, not from it.
        """
        base = self.base_config(settings, layer)
        if layer is not NetworkLayer.TRANSPORT:
            yield base
            return

        overrides = self.profile_overrides(settings)
        default = base
        for override in overrides:
            if override.name == DEFAULT_PROFILE:
                default = self._profile_config(settings, base, override)
        yield default

        for override in overrides:
            if override.name != DEFAULT_PROFILE:
                yield self._profile_config(settings, base, override)

    def resolve(self, settings: Settings, layer: NetworkLayer) -> list[TlsLayerConfig]:
        """Every reachable configuration of *layer*, default profile first."""
        return list(self.iter_configs(settings, layer))

    def requires_client_cert_auth(self, settings: Settings, layer: NetworkLayer) -> bool:
        """True if some configuration of *layer* accepts client certificates over TLS.

        Every profile is resolved before deciding, so each declared keystore
        secret is read even when the default profile already passes.
        """
        for config in self.resolve(settings, layer):
            if config.accepts_client_certificates:
                logger.debug(
                    "%s profile %s accepts client certificates (client_auth=%s)",
                    layer.value,
                    config.profile,
                    config.client_auth.value,
                )
                return True
        return False

    def deprecations(self, settings: Settings) -> list[str]:
        """Warnings for deprecated settings that resolution actually uses."""
        enabled_keys, _default = _SSL_ENABLED_CHAIN[NetworkLayer.TRANSPORT]
        if first_present(settings, enabled_keys) == LEGACY_SSL_ENABLED:
            return [LEGACY_SSL_ENABLED_WARNING]
        return []

    @staticmethod
    def _profile_config(
        settings: Settings, base: TlsLayerConfig, override: ProfileOverride
    ) -> TlsLayerConfig:
        config = base.apply(override)
        facts = _keystore_facts(settings, f"{PROFILES_PREFIX}{override.name}.ssl.")
        if facts:
            config = config.model_copy(update=facts)
        return config
