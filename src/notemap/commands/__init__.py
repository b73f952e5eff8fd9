"""Subcommand modules for notemap.

Provides register_commands() which uses deferred imports to keep
``notemap --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from notemap.commands.classify import classify
    from notemap.commands.resolve import resolve
    from notemap.commands.rewrite import rewrite

    cli.add_command(rewrite)
    cli.add_command(resolve)
    cli.add_command(classify)
