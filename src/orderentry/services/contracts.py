"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``net_total`` vs ``net``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from orderentry.domain.models import OrderRuleViolation, OrderSummary

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class PlaceOrderResultData(OrderSummary):
    """Payload contract for ``OrderService.place_order``."""


class ValidateOrderResultData(BaseModel):
    """Payload contract for ``OrderService.validate_order``."""

    valid: bool
    item_count: int
    violations: list[OrderRuleViolation]
