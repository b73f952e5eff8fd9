"""Rich Console factory and theme for notemap output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NOTEMAP_THEME = Theme(
    {
        "nm.ok": "bold green",
        "nm.error": "bold red",
        "nm.warning": "bold yellow",
        "nm.op": "bold cyan",
        "nm.key": "dim",
        "nm.url": "blue",
        "nm.field": "bold",
        "nm.kind.style": "green",
        "nm.kind.sprite": "magenta",
        "nm.kind.glyphs": "yellow",
        "nm.kind.source": "cyan",
    }
)


def style_for_kind(kind: str | None) -> str:
    """Theme style for a resource kind value (``"style"``, ``"source"``...)."""
    if kind is None:
        return "nm.key"
    return f"nm.kind.{kind}"


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=NOTEMAP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
