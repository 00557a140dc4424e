"""BootstrapChecks — run every startup check and aggregate failures.

All checks run even after one fails so the operator sees every reason at
once. A check that raises aborts the run: settings-read errors are fatal
and are not converted into failed results.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog

from pkicheck.services.result import BootstrapCheckResult, ServiceError, ServiceResult

if TYPE_CHECKING:
    from pkicheck.domain.settings import Settings
    from pkicheck.plugins.manager import PluginManager

log = structlog.get_logger("pkicheck.bootstrap")


@runtime_checkable
class BootstrapCheck(Protocol):
    """A one-shot startup validation."""

    name: str

    def check(self, settings: Settings) -> BootstrapCheckResult: ...


class BootstrapChecks:
    """Ordered collection of bootstrap checks."""

    def __init__(self, checks: Iterable[BootstrapCheck]) -> None:
        self._checks = list(checks)

    @classmethod
    def from_plugins(cls, plugins: PluginManager) -> BootstrapChecks:
        """Collect checks from loaded plugins, loading them first if needed."""
        if not plugins.is_loaded:
            plugins.discover_and_load()
        return cls(plugins.collect_checks())

    def select(self, names: Iterable[str]) -> BootstrapChecks:
        """A new collection holding only the checks named in *names*."""
        wanted = set(names)
        return BootstrapChecks(c for c in self._checks if c.name in wanted)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._checks]

    def run(self, settings: Settings) -> ServiceResult:
        passed: list[str] = []
        failures: list[dict[str, str]] = []
        warnings: list[str] = []

        for check in self._checks:
            result = check.check(settings)
            for warning in result.warnings:
                if warning not in warnings:
                    warnings.append(warning)
            if result.is_failure:
                reason = result.reason or "check failed"
                log.info("bootstrap.check.failed", check=check.name, reason=reason)
                failures.append({"check": check.name, "reason": reason})
            else:
                log.debug("bootstrap.check.passed", check=check.name)
                passed.append(check.name)

        if failures:
            count = len(failures)
            noun = "check" if count == 1 else "checks"
            return ServiceResult(
                ok=False,
                op="check",
                data={"passed": passed, "failures": failures},
                warnings=warnings,
                error=ServiceError(
                    code="BOOTSTRAP_CHECKS_FAILED",
                    message=f"{count} bootstrap {noun} failed",
                    detail={"failures": failures},
                ),
            )

        return ServiceResult(
            ok=True,
            op="check",
            data={"passed": passed, "count": len(passed)},
            warnings=warnings,
        )
