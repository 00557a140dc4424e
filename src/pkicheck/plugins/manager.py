"""Plugin discovery and bootstrap check collection.

Discovery: entry_points (pip-installed) in the ``pkicheck.plugins`` group
via pluggy's setuptools loader. Built-in checks register as plugins too.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from pkicheck.plugins.hookspecs import PkicheckHookSpec

if TYPE_CHECKING:
    from pkicheck.services.bootstrap import BootstrapCheck

PROJECT_NAME = "pkicheck"
ENTRY_POINT_GROUP = "pkicheck.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, registration, and check collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PkicheckHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Register built-in plugins and load entry-point plugins.

        Returns a list of registered plugin names.
        """
        from pkicheck.plugins.builtins.pki import PkiRealmPlugin

        if self._pm.get_plugin("pki") is None:
            self.register_plugin(PkiRealmPlugin(), name="pki")
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_checks(self) -> list[BootstrapCheck]:
        """Gather bootstrap checks from every plugin, ordered by check name.

        Hook implementations that return None contribute nothing.
        """
        checks: list[BootstrapCheck] = []
        for contributed in self._pm.hook.pkicheck_bootstrap_checks():
            if contributed:
                checks.extend(contributed)
        return sorted(checks, key=lambda c: c.name)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly, which leaves
        ``self`` unbound at hook call time.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("pkicheck")`` sets a ``pkicheck_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "pkicheck_impl", None):
                return True
        return False
