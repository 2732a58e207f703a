"""Command: pre-flight order validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orderentry.commands._base import OrderCommand, store_option

if TYPE_CHECKING:
    from orderentry.commands._context import AppContext


@click.command(
    cls=OrderCommand,
    examples="""\
  orderentry validate order.json
  orderentry validate order.json --store fixtures/store.json
  orderentry --json validate order.json""",
)
@click.argument("order_file", type=click.Path(dir_okay=False))
@store_option
@click.pass_obj
def validate(app: AppContext, order_file: str, store_path: str | None) -> None:
    """Check an order against the stock and uniqueness rules."""
    order = app.load_order(order_file)
    svc = app.order_service(store_path)
    app.emit(svc.validate_order(order))
