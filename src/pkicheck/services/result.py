"""ServiceResult, ServiceError, and BootstrapCheckResult.

INVARIANT: Service-layer entry points return ServiceResult; individual
bootstrap checks return BootstrapCheckResult and never raise for a failed
validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"check"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


class BootstrapCheckResult(BaseModel):
    """Outcome of a single bootstrap check."""

    model_config = {"frozen": True}

    is_failure: bool
    reason: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> BootstrapCheckResult:
        return cls(is_failure=False, warnings=warnings or [])

    @classmethod
    def failure(cls, reason: str, warnings: list[str] | None = None) -> BootstrapCheckResult:
        return cls(is_failure=True, reason=reason, warnings=warnings or [])
