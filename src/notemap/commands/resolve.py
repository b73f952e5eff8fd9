"""Command: resolve the configured map style."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from notemap.commands._base import NotemapCommand

if TYPE_CHECKING:
    from notemap.commands._context import AppContext


@click.command(
    cls=NotemapCommand,
    examples="""\
  notemap resolve
  notemap resolve --dark
  notemap --json resolve""",
)
@click.option("--dark", is_flag=True, help="Use the dark tiles/style.")
@click.pass_obj
def resolve(app: AppContext, dark: bool) -> None:
    """Fetch and rewrite the style configured in notemap.toml."""
    from notemap.services.style import StyleService

    app.emit(StyleService(app.settings).resolve(dark=dark))
