"""Settings-read errors.

These are fatal configuration problems, never validation outcomes: a
bootstrap check that hits one must let it propagate instead of reporting
"not configured".
"""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for failures while reading the settings snapshot."""


class InvalidSettingError(SettingsError):
    """Raised when a setting value cannot be parsed into its expected type."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f"Failed to parse value [{value}] for setting [{key}]: expected {expected}")
        self.key = key
        self.value = value
        self.expected = expected


class SecureSettingsClosedError(SettingsError):
    """Raised when a secure value is read after its store has been released."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Secure settings are already closed; cannot read [{key}]")
        self.key = key
