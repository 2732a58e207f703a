"""In-memory collaborator implementations.

Each class satisfies one contract from :mod:`orderentry.domain.ports`.
They back the CLI (via a store file) and the test suite. They are
single-process doubles: no locking, no persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from orderentry.domain.models import Customer, Order, OrderConfirmation, TaxEntry

logger = logging.getLogger(__name__)

ORDER_NUMBER_FORMAT = "ORD-{order_id:06d}"


class TaxRegion(BaseModel):
    """Tax entries for a country, optionally narrowed to one postal code."""

    model_config = {"frozen": True}

    country: str
    postal_code: str | None = None
    entries: tuple[TaxEntry, ...] = ()


class InMemoryProductRepository:
    """Stock lookup over a fixed set of in-stock SKUs."""

    def __init__(self, in_stock: Iterable[str] = ()) -> None:
        self._in_stock = frozenset(in_stock)

    def is_in_stock(self, sku: str) -> bool:
        return sku in self._in_stock


class InMemoryFulfillmentService:
    """Accepts every order, numbering them sequentially.

    The confirmation keeps the order's own customer id.
    """

    def __init__(self, next_order_id: int = 1) -> None:
        self._next_order_id = next_order_id
        self.submitted: list[Order] = []

    def fulfill(self, order: Order) -> OrderConfirmation:
        if order.customer_id is None:
            raise ValueError("Cannot fulfill an order without a customer")
        order_id = self._next_order_id
        self._next_order_id += 1
        self.submitted.append(order)
        return OrderConfirmation(
            order_id=order_id,
            order_number=ORDER_NUMBER_FORMAT.format(order_id=order_id),
            customer_id=order.customer_id,
        )


class InMemoryTaxRateService:
    """Tax lookup: exact postal code match first, then country-wide."""

    def __init__(self, regions: Iterable[TaxRegion] = ()) -> None:
        self._regions = list(regions)

    def get_tax_entries(self, postal_code: str, country: str) -> Sequence[TaxEntry]:
        fallback: Sequence[TaxEntry] = ()
        for region in self._regions:
            if region.country != country:
                continue
            if region.postal_code == postal_code:
                return region.entries
            if region.postal_code is None and not fallback:
                fallback = region.entries
        return fallback


class InMemoryCustomerRepository:
    """Customer lookup keyed by id."""

    def __init__(self, customers: Iterable[Customer] = ()) -> None:
        self._customers = {c.customer_id: c for c in customers}

    def get(self, customer_id: int) -> Customer | None:
        return self._customers.get(customer_id)


class RecordingEmailService:
    """Records confirmation emails instead of sending them."""

    def __init__(self) -> None:
        self.outbox: list[tuple[int, int]] = []

    def send_order_confirmation_email(self, customer_id: int, order_id: int) -> None:
        self.outbox.append((customer_id, order_id))
        logger.info("Confirmation email queued for customer %s, order %s", customer_id, order_id)
