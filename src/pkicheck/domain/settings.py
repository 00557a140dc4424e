"""Read-only node settings snapshot.

Settings are stored as flat dotted keys (``transport.ssl.enabled``) mapped
to strings, the same shape a node configuration file takes once its tables
are flattened. Secret values live in a separate :class:`SecureSettings`
store that travels with the snapshot and can be released independently.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from pkicheck.domain.errors import InvalidSettingError, SecureSettingsClosedError


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested tables into dotted keys with string values."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, f"{full_key}."))
        elif isinstance(value, bool):
            flat[full_key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            flat[full_key] = ",".join(str(v) for v in value)
        elif value is not None:
            flat[full_key] = str(value)
    return flat


class SecureSettings:
    """In-memory secure value store.

    Setting names stay listable after :meth:`close`, but values do not:
    reading one from a closed store raises :class:`SecureSettingsClosedError`.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})
        self._closed = False

    def set_string(self, key: str, value: str) -> None:
        if self._closed:
            raise SecureSettingsClosedError(key)
        self._values[key] = value

    def get_string(self, key: str) -> str:
        if self._closed:
            raise SecureSettingsClosedError(key)
        return self._values[key]

    def setting_names(self) -> frozenset[str]:
        return frozenset(self._values)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release every secret value held by the store."""
        self._values = dict.fromkeys(self._values, "")
        self._closed = True

    def __enter__(self) -> SecureSettings:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Settings:
    """Immutable view over flat dotted-key settings.

    Sub-views returned by :meth:`get_by_prefix` and :meth:`get_groups` share
    the parent's secure store, with the prefix applied to secure lookups.
    """

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        *,
        secure: SecureSettings | None = None,
        secure_prefix: str = "",
    ) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))
        self._secure = secure
        self._secure_prefix = secure_prefix

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        secure: SecureSettings | None = None,
    ) -> Settings:
        """Build a snapshot from nested tables or already-dotted keys."""
        return cls(flatten(data), secure=secure)

    # ------------------------------------------------------------------
    # Plain values
    # ------------------------------------------------------------------

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def get_as_bool(self, key: str, default: bool) -> bool:
        """Parse *key* as a strict ``true``/``false`` flag."""
        raw = self._values.get(key)
        if raw is None:
            return default
        normalized = raw.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
        raise InvalidSettingError(key, raw, "[true] or [false]")

    def get_by_prefix(self, prefix: str) -> Settings:
        """Return the settings under *prefix* with the prefix stripped."""
        return Settings(
            {k[len(prefix) :]: v for k, v in self._values.items() if k.startswith(prefix)},
            secure=self._secure,
            secure_prefix=self._secure_prefix + prefix,
        )

    def get_groups(self, prefix: str) -> dict[str, Settings]:
        """Group settings under ``<prefix><name>.`` by ``<name>``.

        *prefix* must end with a dot. Groups are keyed by name in sorted order.
        """
        names: set[str] = set()
        for key in self._values:
            if key.startswith(prefix):
                name, sep, _rest = key[len(prefix) :].partition(".")
                if sep and name:
                    names.add(name)
        for key in self.secure_names():
            if key.startswith(prefix):
                name, sep, _rest = key[len(prefix) :].partition(".")
                if sep and name:
                    names.add(name)
        return {name: self.get_by_prefix(f"{prefix}{name}.") for name in sorted(names)}

    # ------------------------------------------------------------------
    # Secure values
    # ------------------------------------------------------------------

    @property
    def secure(self) -> SecureSettings | None:
        return self._secure

    def secure_names(self) -> frozenset[str]:
        """Secure setting names visible from this view, prefix stripped."""
        if self._secure is None:
            return frozenset()
        p = self._secure_prefix
        return frozenset(n[len(p) :] for n in self._secure.setting_names() if n.startswith(p))

    def get_secure(self, key: str) -> str | None:
        """Read a secure value, or None when the store does not declare it."""
        if key not in self.secure_names():
            return None
        assert self._secure is not None
        return self._secure.get_string(self._secure_prefix + key)

    # ------------------------------------------------------------------
    # Mapping helpers
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:
        return sorted(self._values)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({dict(self._values)!r})"

    EMPTY: ClassVar[Settings]


Settings.EMPTY = Settings()
