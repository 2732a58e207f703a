"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import date, timedelta


def today_local() -> date:
    """Today's date on the local clock, as the person placing the order sees it."""
    return date.today()


def estimated_delivery(placed_on: date, lead_days: int) -> date:
    """Delivery estimate *lead_days* after *placed_on*.

    Examples:
        >>> estimated_delivery(date(2024, 12, 28), 7)
        datetime.date(2025, 1, 4)
    """
    return placed_on + timedelta(days=lead_days)
