"""Order value models.

Every model is frozen: an Order handed to the placement workflow is never
mutated, and an OrderSummary is built once per successful placement.
Money, rates and quantities are ``Decimal`` so totals reproduce exact
cent-level results.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Catalog product, identified by its SKU.

    Only ``sku`` and ``price`` take part in validation and pricing; the
    remaining fields are display-only.
    """

    model_config = {"frozen": True}

    sku: str
    price: Decimal = Field(ge=0)
    name: str = ""
    description: str = ""
    product_id: int | None = None


class OrderItem(BaseModel):
    """One order line. Quantity may be fractional (weight-based goods)."""

    model_config = {"frozen": True}

    product: Product
    quantity: Decimal = Field(gt=0)


class Order(BaseModel):
    """A customer purchase order as handed over by the caller."""

    model_config = {"frozen": True}

    customer_id: int | None = None
    items: tuple[OrderItem, ...] = ()


class Customer(BaseModel):
    """Customer record; postal code and country select the tax entries."""

    model_config = {"frozen": True}

    customer_id: int
    postal_code: str
    country: str
    email_address: str = ""


class TaxEntry(BaseModel):
    """A named tax bracket, e.g. ``TaxEntry(description="State Tax", rate=...)``."""

    model_config = {"frozen": True}

    description: str
    rate: Decimal


class OrderConfirmation(BaseModel):
    """Receipt returned by the fulfillment service."""

    model_config = {"frozen": True}

    order_id: int
    order_number: str = ""
    customer_id: int


class OrderSummary(BaseModel):
    """Result of a successful placement."""

    model_config = {"frozen": True}

    order_id: int
    order_number: str
    customer_id: int
    taxes: tuple[TaxEntry, ...]
    net_total: Decimal
    total: Decimal
    items: tuple[OrderItem, ...]
    estimated_delivery_date: date


class OrderRuleViolation(BaseModel):
    """One failed business rule."""

    model_config = {"frozen": True}

    error_message: str
    property_name: str | None = None
