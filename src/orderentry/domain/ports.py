"""Collaborator contracts consumed by the placement workflow.

Implementations live outside the domain (see ``orderentry.infrastructure``
for the in-memory ones). Only structural typing is required.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from orderentry.domain.models import Customer, Order, OrderConfirmation, TaxEntry


class ProductRepository(Protocol):
    """Stock lookup. Must be a pure query."""

    def is_in_stock(self, sku: str) -> bool: ...


class OrderFulfillmentService(Protocol):
    """Submits an order downstream and returns its confirmation."""

    def fulfill(self, order: Order) -> OrderConfirmation: ...


class TaxRateService(Protocol):
    """Resolves the tax entries applicable to a location."""

    def get_tax_entries(self, postal_code: str, country: str) -> Sequence[TaxEntry]: ...


class CustomerRepository(Protocol):
    """Customer lookup; returns None for unknown ids."""

    def get(self, customer_id: int) -> Customer | None: ...


class EmailService(Protocol):
    """Confirmation email delivery."""

    def send_order_confirmation_email(self, customer_id: int, order_id: int) -> None: ...
