"""Order pricing.

Grand total is the net total multiplied by the SUM of all tax rates,
applied once: ``net * sum(rates)``, not ``net * (1 + sum(rates))``.
Rates are used exactly as the tax service returns them.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from orderentry.domain.models import OrderItem, TaxEntry

_ZERO = Decimal("0")


def net_total(items: Iterable[OrderItem]) -> Decimal:
    """Sum of price x quantity over all items.

    Examples:
        >>> from orderentry.domain.models import Product
        >>> net_total([
        ...     OrderItem(product=Product(sku="1", price=Decimal("43.50")), quantity=Decimal(2)),
        ...     OrderItem(product=Product(sku="2", price=Decimal("1.20")), quantity=Decimal("2.5")),
        ... ])
        Decimal('90.000')
    """
    return sum((item.product.price * item.quantity for item in items), _ZERO)


def total(tax_entries: Iterable[TaxEntry], net: Decimal) -> Decimal:
    """Net total multiplied by the combined tax rate."""
    combined_rate = sum((entry.rate for entry in tax_entries), _ZERO)
    return net * combined_rate
