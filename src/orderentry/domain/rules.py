"""Order business rules.

Two independent rules, both always evaluated so that every applicable
violation surfaces together:

- Stock: every item's SKU must be reported in stock. One violation for
  the whole order, not one per item.
- Uniqueness: no two items may reference the same SKU.

Violations are returned stock-first; callers may inspect the first element.
"""

from __future__ import annotations

from collections.abc import Sequence

from orderentry.domain.models import Order, OrderItem, OrderRuleViolation
from orderentry.domain.ports import ProductRepository

OUT_OF_STOCK_MESSAGE = "A product is out of stock"
NOT_UNIQUE_MESSAGE = "Products are not unique"


def are_products_in_stock(items: Sequence[OrderItem], stock_checker: ProductRepository) -> bool:
    """True if the stock checker reports every item's SKU in stock.

    Stops at the first out-of-stock SKU. An empty sequence is in stock.
    """
    return all(stock_checker.is_in_stock(item.product.sku) for item in items)


def are_products_unique(items: Sequence[OrderItem]) -> bool:
    """True if no two items share a product SKU.

    Only the SKU counts; name, description and price are ignored.

    Examples:
        >>> from decimal import Decimal
        >>> from orderentry.domain.models import Product
        >>> a = OrderItem(product=Product(sku="1", price=Decimal(1)), quantity=Decimal(1))
        >>> b = OrderItem(product=Product(sku="1", price=Decimal(2), name="B"), quantity=Decimal(1))
        >>> are_products_unique([a, b])
        False
        >>> are_products_unique([])
        True
    """
    return len({item.product.sku for item in items}) == len(items)


def validate_order(order: Order, stock_checker: ProductRepository) -> list[OrderRuleViolation]:
    """Evaluate both rules and return the violations (empty when valid)."""
    violations: list[OrderRuleViolation] = []
    if not are_products_in_stock(order.items, stock_checker):
        violations.append(
            OrderRuleViolation(error_message=OUT_OF_STOCK_MESSAGE, property_name="items")
        )
    if not are_products_unique(order.items):
        violations.append(
            OrderRuleViolation(error_message=NOT_UNIQUE_MESSAGE, property_name="items")
        )
    return violations


def is_valid_order(order: Order, stock_checker: ProductRepository) -> bool:
    """True if *order* passes every rule."""
    return not validate_order(order, stock_checker)
