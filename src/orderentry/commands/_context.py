"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds the OrderService from a store file on demand
and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from orderentry.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from orderentry.config.settings import OrderEntrySettings
    from orderentry.domain.models import Order
    from orderentry.infrastructure.store import Store
    from orderentry.services.orders import OrderService
    from orderentry.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Nothing is loaded at construction so ``--help`` and ``--version``
    never touch the filesystem.
    """

    def __init__(self, settings: OrderEntrySettings) -> None:
        self.settings = settings
        self.store: Store | None = None

        from orderentry.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from orderentry.services.telemetry import enable_telemetry

            enable_telemetry()

    def order_service(self, store_path: str | None = None) -> OrderService:
        """Load the store (explicit path or ``store.path``) and wire an OrderService."""
        from orderentry.infrastructure.store import StoreError, load_store
        from orderentry.services.orders import OrderService

        path = Path(store_path) if store_path else self.settings.store_path
        try:
            self.store = load_store(path)
        except StoreError as exc:
            raise click.ClickException(str(exc)) from exc

        return OrderService(
            product_repository=self.store.products,
            fulfillment=self.store.fulfillment,
            tax_rates=self.store.tax_rates,
            customers=self.store.customers,
            email=self.store.email,
            orders_config=self.settings.orders,
            notifications_config=self.settings.notifications,
        )

    def load_order(self, order_file: str) -> Order:
        """Read an order file, reporting problems as a Click error."""
        from orderentry.infrastructure.store import StoreError, load_order

        try:
            return load_order(Path(order_file))
        except StoreError as exc:
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
