"""Subcommand modules for orderentry.

Provides register_commands() which uses deferred imports to keep
``orderentry --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from orderentry.commands.place import place
    from orderentry.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(place)
