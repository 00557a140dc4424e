"""Extension layer — bootstrap check registration via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
"""

from pkicheck.plugins.manager import PluginManager

__all__ = ["PluginManager"]
