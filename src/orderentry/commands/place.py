"""Command: place an order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orderentry.commands._base import OrderCommand, store_option

if TYPE_CHECKING:
    from orderentry.commands._context import AppContext


@click.command(
    cls=OrderCommand,
    examples="""\
  orderentry place order.json
  orderentry place order.json --store fixtures/store.json
  orderentry --json place order.json
  orderentry -v place order.json""",
)
@click.argument("order_file", type=click.Path(dir_okay=False))
@store_option
@click.pass_obj
def place(app: AppContext, order_file: str, store_path: str | None) -> None:
    """Validate, fulfill, price and confirm an order."""
    order = app.load_order(order_file)
    svc = app.order_service(store_path)
    app.emit(svc.place_order(order))
