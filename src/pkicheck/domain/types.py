"""Network layers, client-authentication modes, and realm/TLS value objects.

Every model here is frozen and built fresh from a settings snapshot for a
single check invocation.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from pkicheck.domain.errors import InvalidSettingError

PKI_REALM_TYPE = "pki"
DEFAULT_PROFILE = "default"


class NetworkLayer(StrEnum):
    """Network layers that carry their own TLS settings."""

    TRANSPORT = "transport"
    HTTP = "http"


class ClientAuth(StrEnum):
    """Whether a TLS listener asks the peer for a certificate."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"

    @classmethod
    def parse(cls, key: str, value: str) -> ClientAuth:
        """Parse a setting value, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidSettingError(key, value, "one of [required, optional, none]") from None

    @property
    def requests_certificate(self) -> bool:
        """True when the listener asks for a certificate, mandatory or not."""
        return self is not ClientAuth.NONE


class RealmConfig(BaseModel):
    """A configured authentication realm."""

    model_config = {"frozen": True}

    name: str
    type: str
    enabled: bool = True

    @property
    def is_pki(self) -> bool:
        return self.type == PKI_REALM_TYPE


class ProfileOverride(BaseModel):
    """Per-profile TLS overrides; None means inherit from the layer base."""

    model_config = {"frozen": True}

    name: str
    ssl_enabled: bool | None = None
    client_auth: ClientAuth | None = None


class TlsLayerConfig(BaseModel):
    """Effective TLS configuration of one listener (layer + profile)."""

    model_config = {"frozen": True}

    layer: NetworkLayer
    profile: str = DEFAULT_PROFILE
    ssl_enabled: bool
    client_auth: ClientAuth
    keystore_path: str | None = None
    has_keystore_password: bool = False

    @property
    def accepts_client_certificates(self) -> bool:
        """TLS is on and the listener requests or requires a client certificate."""
        return self.ssl_enabled and self.client_auth.requests_certificate

    def apply(self, override: ProfileOverride) -> TlsLayerConfig:
        """Return the configuration of *override*'s profile, inheriting from self."""
        return self.model_copy(
            update={
                "profile": override.name,
                "ssl_enabled": (
                    self.ssl_enabled if override.ssl_enabled is None else override.ssl_enabled
                ),
                "client_auth": (
                    self.client_auth if override.client_auth is None else override.client_auth
                ),
            }
        )
