"""Command: show how a single reference would be rewritten."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from notemap.commands._base import NotemapCommand
from notemap.domain.types import ResourceKind

if TYPE_CHECKING:
    from notemap.commands._context import AppContext


@click.command(
    cls=NotemapCommand,
    examples="""\
  notemap classify mapbox://styles/user/streets
  notemap classify mapbox://user.tileset --role source -t pk.abc123
  notemap -q classify mapbox://sprites/user/streets@2x -t pk.abc123""",
)
@click.argument("reference")
@click.option(
    "--role",
    type=click.Choice([kind.value for kind in ResourceKind]),
    default=None,
    help="Logical role of the field holding the reference.",
)
@click.option(
    "-t",
    "--token",
    "access_token",
    envvar="NOTEMAP_ACCESS_TOKEN",
    default="",
    help="Access token for the resolved endpoint.",
)
@click.pass_obj
def classify(app: AppContext, reference: str, role: str | None, access_token: str) -> None:
    """Classify REFERENCE and print its resolved endpoint."""
    from notemap.services.style import StyleService

    kind = ResourceKind(role) if role else None
    app.emit(StyleService(app.settings).classify(reference, role=kind, access_token=access_token))
