"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer operations return ServiceResult.
Business failures are data on the result, never exceptions; callers branch
on ``result.error.code``. Collaborator exceptions are not results and
propagate to the caller untouched.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from orderentry.domain.models import OrderRuleViolation


class ErrorCode(StrEnum):
    """Failure kinds a service can report."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``violations`` is only populated for ``VALIDATION_FAILED`` and then
    always holds at least one entry, in rule order.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    violations: tuple[OrderRuleViolation, ...] = ()
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"place_order"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
