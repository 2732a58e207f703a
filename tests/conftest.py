"""Shared pytest fixtures and test helpers for orderentry tests."""

from __future__ import annotations

import json
from collections.abc import Generator, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from orderentry.domain.models import (
    Customer,
    Order,
    OrderConfirmation,
    OrderItem,
    Product,
    TaxEntry,
)
from orderentry.services.orders import OrderService
from orderentry.services.telemetry import disable_telemetry

TODAY = date(2024, 3, 1)


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """Verbose CLI runs enable telemetry; never let it leak between tests."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Order builders
# ---------------------------------------------------------------------------


def item(sku: str, price: str, quantity: str | int = 1, **product: Any) -> OrderItem:
    """Build an OrderItem from string money values."""
    return OrderItem(
        product=Product(sku=sku, price=Decimal(price), **product),
        quantity=Decimal(quantity),
    )


def items_without_duplicates() -> tuple[OrderItem, ...]:
    return (
        item("1", "43.5", 2, name="a", description="a", product_id=1),
        item("2", "1.2", "2.5", name="b", description="b", product_id=2),
    )


def items_with_duplicate_skus() -> tuple[OrderItem, ...]:
    """Two lines for SKU "1" that differ in every other field."""
    return (
        item("1", "43.5", 2, name="a", description="a", product_id=1),
        item("1", "1.2", "2.5", name="A", description="A", product_id=1),
    )


def realistic_items() -> tuple[OrderItem, ...]:
    return (
        item("1-1989-5", "24.99", 2, name="Lamp", product_id=1,
             description="This is a riveting description of a lamp."),
        item("1-1989-6", "389.99", 1, name="Fan", product_id=2,
             description="This is another great description, but of a (big) fan!"),
        item("1-2032-89", "24.49", 4, name="Photo Album", product_id=3,
             description="Photo album description"),
        item("2-0001-43", "15.16", 100, name="240 Grit Sandpaper", product_id=4,
             description="Sand Paper description"),
        item("3-2000-14", "659.93", 1, name="Leather Couch", product_id=5,
             description="Couch description"),
    )


def make_order(items: Sequence[OrderItem], customer_id: int | None = 1) -> Order:
    return Order(customer_id=customer_id, items=tuple(items))


STATE_AND_FEDERAL_TAX = (
    TaxEntry(description="State Tax", rate=Decimal("5.6")),
    TaxEntry(description="Federal Tax", rate=Decimal("8.2")),
)


# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------


class StubProductRepository:
    """Answers from a per-SKU map, falling back to *default*; records queries."""

    def __init__(self, default: bool = True, stock: dict[str, bool] | None = None) -> None:
        self.default = default
        self.stock = stock or {}
        self.queries: list[str] = []

    def is_in_stock(self, sku: str) -> bool:
        self.queries.append(sku)
        return self.stock.get(sku, self.default)


class StubFulfillment:
    def __init__(self, confirmation: OrderConfirmation | None = None) -> None:
        self.confirmation = confirmation or OrderConfirmation(
            order_id=2, order_number="1337", customer_id=1
        )
        self.submitted: list[Order] = []

    def fulfill(self, order: Order) -> OrderConfirmation:
        self.submitted.append(order)
        return self.confirmation


class StubTaxRates:
    def __init__(self, entries: Sequence[TaxEntry] = STATE_AND_FEDERAL_TAX) -> None:
        self.entries = list(entries)
        self.lookups: list[tuple[str, str]] = []

    def get_tax_entries(self, postal_code: str, country: str) -> Sequence[TaxEntry]:
        self.lookups.append((postal_code, country))
        return self.entries


class StubCustomers:
    def __init__(self, *customers: Customer) -> None:
        self.customers = {c.customer_id: c for c in customers} or {
            1: Customer(
                customer_id=1,
                email_address="test@test.com",
                postal_code="postal code",
                country="country",
            )
        }
        self.lookups: list[int] = []

    def get(self, customer_id: int) -> Customer | None:
        self.lookups.append(customer_id)
        return self.customers.get(customer_id)


class RecordingEmail:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[tuple[int, int]] = []

    def send_order_confirmation_email(self, customer_id: int, order_id: int) -> None:
        self.sent.append((customer_id, order_id))
        if self.error is not None:
            raise self.error


@dataclass
class Collaborators:
    products: StubProductRepository = field(default_factory=StubProductRepository)
    fulfillment: StubFulfillment = field(default_factory=StubFulfillment)
    tax_rates: StubTaxRates = field(default_factory=StubTaxRates)
    customers: StubCustomers = field(default_factory=StubCustomers)
    email: RecordingEmail = field(default_factory=RecordingEmail)

    def service(self, **kwargs: Any) -> OrderService:
        return OrderService(
            product_repository=self.products,
            fulfillment=self.fulfillment,
            tax_rates=self.tax_rates,
            customers=self.customers,
            email=self.email,
            clock=lambda: TODAY,
            **kwargs,
        )


@pytest.fixture
def collaborators() -> Collaborators:
    """All-in-stock stubs with customer 1 and the state/federal tax pair."""
    return Collaborators()


# ---------------------------------------------------------------------------
# Files for CLI and store tests
# ---------------------------------------------------------------------------


def order_payload(order: Order) -> dict[str, Any]:
    """JSON-ready dict for an order file, money kept as strings."""
    return {
        "customer_id": order.customer_id,
        "items": [
            {
                "product": {
                    "sku": i.product.sku,
                    "price": str(i.product.price),
                    "name": i.product.name,
                    "description": i.product.description,
                    "product_id": i.product.product_id,
                },
                "quantity": str(i.quantity),
            }
            for i in order.items
        ],
    }


def store_payload(in_stock: Sequence[str], **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "in_stock": list(in_stock),
        "customers": [
            {
                "customer_id": 1,
                "postal_code": "97201",
                "country": "US",
                "email_address": "test@test.com",
            }
        ],
        "tax_regions": [
            {
                "country": "US",
                "entries": [
                    {"description": "State Tax", "rate": "5.6"},
                    {"description": "Federal Tax", "rate": "8.2"},
                ],
            }
        ],
        "next_order_id": 2,
    }
    payload.update(overrides)
    return payload


def write_json(path: Path, payload: dict[str, Any]) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated project directory (CWD) holding store.json and two orders.

    - ``order.json``: the realistic five-item order for customer 1
    - ``duplicate.json``: an order with a repeated SKU
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORDERENTRY_CONFIG", raising=False)
    skus = [i.product.sku for i in realistic_items()]
    write_json(tmp_path / "store.json", store_payload(skus))
    write_json(tmp_path / "order.json", order_payload(make_order(realistic_items())))
    write_json(
        tmp_path / "duplicate.json",
        order_payload(make_order(items_with_duplicate_skus())),
    )
    return tmp_path
