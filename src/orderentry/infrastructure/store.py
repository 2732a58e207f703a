"""JSON store and order file loading.

A store file describes the in-memory collaborators the CLI places orders
against::

    {
      "in_stock": ["1-1989-5", "1-1989-6"],
      "customers": [
        {"customer_id": 1, "postal_code": "97201", "country": "US",
         "email_address": "test@test.com"}
      ],
      "tax_regions": [
        {"country": "US", "entries": [
          {"description": "State Tax", "rate": "5.6"},
          {"description": "Federal Tax", "rate": "8.2"}
        ]}
      ],
      "next_order_id": 1
    }

Monetary values and rates may be given as JSON strings or numbers; strings
keep them exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from orderentry.domain.models import Customer, Order
from orderentry.infrastructure.memory import (
    InMemoryCustomerRepository,
    InMemoryFulfillmentService,
    InMemoryProductRepository,
    InMemoryTaxRateService,
    RecordingEmailService,
    TaxRegion,
)


class StoreError(Exception):
    """A store or order file is missing, unreadable, or malformed."""


class StoreFile(BaseModel):
    """On-disk shape of a store file."""

    model_config = {"frozen": True, "extra": "forbid"}

    in_stock: list[str] = Field(default_factory=list)
    customers: list[Customer] = Field(default_factory=list)
    tax_regions: list[TaxRegion] = Field(default_factory=list)
    next_order_id: int = Field(default=1, ge=1)


@dataclass
class Store:
    """The collaborators built from one store file."""

    products: InMemoryProductRepository
    fulfillment: InMemoryFulfillmentService
    tax_rates: InMemoryTaxRateService
    customers: InMemoryCustomerRepository
    email: RecordingEmailService

    @classmethod
    def from_file_model(cls, data: StoreFile) -> Store:
        return cls(
            products=InMemoryProductRepository(data.in_stock),
            fulfillment=InMemoryFulfillmentService(next_order_id=data.next_order_id),
            tax_rates=InMemoryTaxRateService(data.tax_regions),
            customers=InMemoryCustomerRepository(data.customers),
            email=RecordingEmailService(),
        )


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StoreError(f"Cannot read {what} file {path}: {exc.strerror or exc}") from exc


def load_store(path: Path) -> Store:
    """Read a store file and build its collaborators."""
    raw = _read(path, "store")
    try:
        data = StoreFile.model_validate_json(raw)
    except ValidationError as exc:
        raise StoreError(f"Invalid store file {path}: {exc}") from exc
    return Store.from_file_model(data)


def load_order(path: Path) -> Order:
    """Read an order file (``{"customer_id": ..., "items": [...]}``)."""
    raw = _read(path, "order")
    try:
        return Order.model_validate_json(raw)
    except ValidationError as exc:
        raise StoreError(f"Invalid order file {path}: {exc}") from exc
