"""OrderService — order validation and placement.

Placement pipeline:
VALIDATE → CUSTOMER → FULFILL → TAX → PRICE → NOTIFY → RESPOND

The customer id is checked and the customer resolved before the order is
submitted for fulfillment, so an order that fails on its customer never
leaves a fulfillment side effect behind.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date

from orderentry.config.models import NotificationsConfig, OrdersConfig
from orderentry.domain import pricing, rules
from orderentry.domain.models import Order, OrderItem, OrderRuleViolation, OrderSummary
from orderentry.domain.ports import (
    CustomerRepository,
    EmailService,
    OrderFulfillmentService,
    ProductRepository,
    TaxRateService,
)
from orderentry.services._helpers import estimated_delivery, today_local
from orderentry.services.contracts import (
    PlaceOrderResultData,
    ValidateOrderResultData,
    dump_validated,
)
from orderentry.services.result import ErrorCode, ServiceError, ServiceResult
from orderentry.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

CUSTOMER_ID_NULL_MESSAGE = "Customer ID was null"


class OrderService:
    """Validates and places orders against the injected collaborators."""

    def __init__(
        self,
        *,
        product_repository: ProductRepository,
        fulfillment: OrderFulfillmentService,
        tax_rates: TaxRateService,
        customers: CustomerRepository,
        email: EmailService,
        orders_config: OrdersConfig | None = None,
        notifications_config: NotificationsConfig | None = None,
        clock: Callable[[], date] = today_local,
    ) -> None:
        self._products = product_repository
        self._fulfillment = fulfillment
        self._tax_rates = tax_rates
        self._customers = customers
        self._email = email
        self._orders_config = orders_config or OrdersConfig()
        self._notifications_config = notifications_config or NotificationsConfig()
        self._clock = clock

    # ------------------------------------------------------------------
    # Pre-flight checks
    # ------------------------------------------------------------------

    def are_products_in_stock(self, items: Sequence[OrderItem]) -> bool:
        """True if every item's SKU is in stock."""
        return rules.are_products_in_stock(items, self._products)

    def are_products_unique(self, items: Sequence[OrderItem]) -> bool:
        """True if no two items share a SKU."""
        return rules.are_products_unique(items)

    @traced
    def validate_order(self, order: Order) -> ServiceResult:
        """Run the business rules without placing the order."""
        op = "validate_order"
        violations = rules.validate_order(order, self._products)
        if violations:
            return _validation_failed(op, violations)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ValidateOrderResultData,
                {"valid": True, "item_count": len(order.items), "violations": []},
            ),
        )

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    @traced
    def place_order(self, order: Order) -> ServiceResult:
        """Validate, fulfill, price and confirm *order*.

        Business failures come back as a failed ServiceResult; that
        includes a missing customer id, which is reported as an
        ``INVALID_ARGUMENT`` error rather than raised. Exceptions
        raised by the fulfillment, tax or customer collaborators propagate
        unchanged. Email failures follow ``notifications.best_effort``.
        """
        op = "place_order"
        warnings: list[str] = []

        with trace_span("validate") as span:
            violations = rules.validate_order(order, self._products)
            if span:
                span.annotate("violations", len(violations))
        if violations:
            logger.debug("Order rejected with %d violation(s)", len(violations))
            return _validation_failed(op, violations)

        with trace_span("customer"):
            if order.customer_id is None:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code=ErrorCode.INVALID_ARGUMENT,
                        message=CUSTOMER_ID_NULL_MESSAGE,
                        detail={"field": "customer_id"},
                    ),
                )
            customer = self._customers.get(order.customer_id)
            if customer is None:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code=ErrorCode.CUSTOMER_NOT_FOUND,
                        message=f"No customer with ID {order.customer_id}",
                        detail={"customer_id": order.customer_id},
                    ),
                )

        with trace_span("fulfill") as span:
            confirmation = self._fulfillment.fulfill(order)
            if span:
                span.annotate("order_id", confirmation.order_id)
        logger.debug(
            "Order %s fulfilled as %r",
            confirmation.order_id,
            confirmation.order_number,
        )

        with trace_span("tax"):
            taxes = tuple(self._tax_rates.get_tax_entries(customer.postal_code, customer.country))

        with trace_span("price"):
            net = pricing.net_total(order.items)
            grand = pricing.total(taxes, net)

        with trace_span("notify"):
            self._send_confirmation(confirmation.customer_id, confirmation.order_id, warnings)

        summary = OrderSummary(
            order_id=confirmation.order_id,
            order_number=confirmation.order_number,
            customer_id=confirmation.customer_id,
            taxes=taxes,
            net_total=net,
            total=grand,
            items=order.items,
            estimated_delivery_date=estimated_delivery(
                self._clock(), self._orders_config.delivery_days
            ),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(PlaceOrderResultData, summary.model_dump()),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _send_confirmation(self, customer_id: int, order_id: int, warnings: list[str]) -> None:
        """Send the confirmation email.

        INVARIANT: under the best-effort policy an email failure is a
        warning, never an error.
        """
        try:
            self._email.send_order_confirmation_email(customer_id, order_id)
        except Exception as exc:
            if not self._notifications_config.best_effort:
                raise
            logger.warning(
                "Confirmation email for order %s failed", order_id, exc_info=True
            )
            warnings.append(f"Confirmation email for order {order_id} failed: {exc}")


def _validation_failed(op: str, violations: list[OrderRuleViolation]) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=ErrorCode.VALIDATION_FAILED,
            message="; ".join(v.error_message for v in violations),
            violations=tuple(violations),
        ),
    )
