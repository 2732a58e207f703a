"""Custom Click base class with --examples support.

``--examples`` prints usage examples and exits, which keeps ``--help``
concise while making examples available on demand.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class OrderCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def store_option(func: Any) -> Any:
    """Shared ``--store`` option; defaults to ``store.path`` from settings."""
    return click.option(
        "--store",
        "store_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Store file with stock, customers and tax regions.",
    )(func)
