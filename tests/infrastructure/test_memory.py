"""Tests for the in-memory collaborator implementations."""

from __future__ import annotations

from decimal import Decimal

import pytest

from orderentry.domain.models import Customer, TaxEntry
from orderentry.infrastructure.memory import (
    InMemoryCustomerRepository,
    InMemoryFulfillmentService,
    InMemoryProductRepository,
    InMemoryTaxRateService,
    RecordingEmailService,
    TaxRegion,
)
from orderentry.services.orders import OrderService
from tests.conftest import items_without_duplicates, make_order

STATE = TaxEntry(description="State Tax", rate=Decimal("5.6"))
FEDERAL = TaxEntry(description="Federal Tax", rate=Decimal("8.2"))
CITY = TaxEntry(description="City Tax", rate=Decimal("0.5"))


class TestInMemoryProductRepository:
    def test_lookup(self) -> None:
        repo = InMemoryProductRepository(["a", "b"])
        assert repo.is_in_stock("a")
        assert not repo.is_in_stock("c")

    def test_empty(self) -> None:
        assert not InMemoryProductRepository().is_in_stock("a")


class TestInMemoryFulfillmentService:
    def test_sequential_ids(self) -> None:
        svc = InMemoryFulfillmentService(next_order_id=41)
        first = svc.fulfill(make_order(items_without_duplicates(), customer_id=3))
        second = svc.fulfill(make_order(items_without_duplicates(), customer_id=4))
        assert (first.order_id, first.order_number, first.customer_id) == (41, "ORD-000041", 3)
        assert (second.order_id, second.customer_id) == (42, 4)
        assert len(svc.submitted) == 2

    def test_rejects_order_without_customer(self) -> None:
        with pytest.raises(ValueError):
            InMemoryFulfillmentService().fulfill(make_order([], customer_id=None))


class TestInMemoryTaxRateService:
    def _service(self) -> InMemoryTaxRateService:
        return InMemoryTaxRateService(
            [
                TaxRegion(country="US", entries=(STATE, FEDERAL)),
                TaxRegion(country="US", postal_code="97201", entries=(CITY, STATE, FEDERAL)),
            ]
        )

    def test_postal_code_match_wins(self) -> None:
        assert list(self._service().get_tax_entries("97201", "US")) == [CITY, STATE, FEDERAL]

    def test_country_fallback(self) -> None:
        assert list(self._service().get_tax_entries("10001", "US")) == [STATE, FEDERAL]

    def test_unknown_country(self) -> None:
        assert list(self._service().get_tax_entries("97201", "CA")) == []


class TestInMemoryCustomerRepository:
    def test_lookup(self) -> None:
        customer = Customer(customer_id=1, postal_code="97201", country="US")
        repo = InMemoryCustomerRepository([customer])
        assert repo.get(1) == customer
        assert repo.get(2) is None


class TestRecordingEmailService:
    def test_outbox(self) -> None:
        email = RecordingEmailService()
        email.send_order_confirmation_email(1, 2)
        assert email.outbox == [(1, 2)]


class TestWiredTogether:
    def test_place_order_with_in_memory_collaborators(self) -> None:
        order = make_order(items_without_duplicates())
        email = RecordingEmailService()
        svc = OrderService(
            product_repository=InMemoryProductRepository(["1", "2"]),
            fulfillment=InMemoryFulfillmentService(next_order_id=7),
            tax_rates=InMemoryTaxRateService([TaxRegion(country="US", entries=(STATE,))]),
            customers=InMemoryCustomerRepository(
                [Customer(customer_id=1, postal_code="97201", country="US")]
            ),
            email=email,
        )
        result = svc.place_order(order)
        assert result.ok, result.error
        assert result.data["order_number"] == "ORD-000007"
        assert result.data["total"] == Decimal("90.00") * Decimal("5.6")
        assert email.outbox == [(1, 7)]
