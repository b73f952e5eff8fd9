"""Command: rewrite short-form references in a style document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click

from notemap.commands._base import NotemapCommand

if TYPE_CHECKING:
    from notemap.commands._context import AppContext


@click.command(
    cls=NotemapCommand,
    examples="""\
  notemap rewrite style.json --token pk.abc123
  curl -s https://example.com/style.json | notemap rewrite - -t pk.abc123
  notemap rewrite style.json -t pk.abc123 -o style.resolved.json
  notemap --json rewrite style.json -t pk.abc123""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-t",
    "--token",
    "access_token",
    envvar="NOTEMAP_ACCESS_TOKEN",
    default="",
    help="Access token appended to every rewritten endpoint.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the rewritten style here instead of stdout.",
)
@click.pass_obj
def rewrite(app: AppContext, source: TextIO, access_token: str, output_path: Path | None) -> None:
    """Resolve mapbox:// references in a style JSON document."""
    from notemap.services.result import ServiceResult
    from notemap.services.style import StyleService

    try:
        document = json.load(source)
    except ValueError as exc:
        app.emit(ServiceResult.failure("rewrite_style", "INVALID_JSON", f"Invalid JSON: {exc}"))
        return

    result = StyleService(app.settings).rewrite(document, access_token)
    if not result.ok:
        app.emit(result)
        return

    rendered = json.dumps(result.data["style"], indent=2, ensure_ascii=False)
    if output_path is not None:
        output_path.write_text(rendered + "\n", encoding="utf-8")
        app.emit(result)
    elif app.settings.json_output:
        app.emit(result)
    else:
        click.echo(rendered)
        app.emit_warnings(result)
