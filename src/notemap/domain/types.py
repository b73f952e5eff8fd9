"""Classification enums for style references and sprite fields."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """How a short-form reference must be rewritten."""

    STYLE = "style"
    SPRITE = "sprite"
    GLYPHS = "glyphs"
    SOURCE = "source"


class SpriteVariant(StrEnum):
    """Shape of the top-level ``sprite`` field of a style document."""

    ABSENT = "absent"
    REFERENCE = "reference"  # a single URL string
    STRUCTURED = "structured"  # anything else, e.g. a list of {id, url} entries
