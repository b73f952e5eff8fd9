"""Style documents and the reference-rewriting walker.

A style document is the JSON object a map renderer consumes: sources,
sprite sheet, glyph service, projection, layers, and so on. Only the
fields the walker touches are typed; every other key is carried through
untouched so a round trip never drops or adds data.

INVARIANT: the walker never raises. A reference that cannot be parsed or
classified is left exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    ValidationError,
    field_validator,
    model_serializer,
    model_validator,
)

from notemap.domain.endpoints import rewrite_reference
from notemap.domain.locators import MalformedLocatorError, is_proprietary_reference
from notemap.domain.types import ResourceKind, SpriteVariant

logger = logging.getLogger(__name__)


class StyleObject(BaseModel):
    """JSON object that keeps unknown keys and dumps them in input order."""

    model_config = ConfigDict(extra="allow")

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def remember_key_order(cls, data: Any, handler: ModelWrapValidatorHandler[Any]) -> Any:
        model = handler(data)
        if isinstance(data, dict):
            model._key_order = tuple(data)
        return model

    @model_serializer(mode="wrap")
    def restore_key_order(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        ordered = {key: dumped[key] for key in self._key_order if key in dumped}
        ordered.update(dumped)
        return ordered


def _as_model(model_cls: type[StyleObject], value: Any) -> Any:
    """Wrap a JSON object in *model_cls*; anything else is kept as given."""
    if not isinstance(value, dict):
        return value
    try:
        return model_cls.model_validate(value)
    except ValidationError:
        return value


class Projection(StyleObject):
    """Top-level ``projection`` descriptor."""

    name: Any = None  # rejected by the renderer, always stripped


class SourceDescriptor(StyleObject):
    """One entry of ``sources``; only a string ``url`` is inspected."""

    type: Any = None
    url: Any = None


class SpriteEntry(StyleObject):
    """One element of a structured (multi-sprite) ``sprite`` field."""

    id: str
    url: str


class StyleDocument(StyleObject):
    """Typed view over a style JSON object.

    Fields the walker cannot use keep their raw JSON value: a non-object
    source, a sprite given as an object, or a ``url`` that is not a string
    all pass through unchanged.
    """

    projection: Projection | Any = None
    sources: dict[str, SourceDescriptor | Any] = Field(default_factory=dict)
    sprite: str | list[SpriteEntry] | Any = None
    glyphs: Any = None

    @field_validator("projection", mode="plain")
    @classmethod
    def wrap_projection(cls, value: Any) -> Any:
        return _as_model(Projection, value)

    @field_validator("sources", mode="plain")
    @classmethod
    def wrap_sources(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise ValueError("sources must be a JSON object")
        return {key: _as_model(SourceDescriptor, entry) for key, entry in value.items()}

    @field_validator("sprite", mode="plain")
    @classmethod
    def wrap_sprite(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        entries = [_as_model(SpriteEntry, entry) for entry in value]
        if all(isinstance(entry, SpriteEntry) for entry in entries):
            return entries
        return value

    @property
    def sprite_variant(self) -> SpriteVariant:
        if self.sprite is None:
            return SpriteVariant.ABSENT
        if isinstance(self.sprite, str):
            return SpriteVariant.REFERENCE
        return SpriteVariant.STRUCTURED

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> StyleDocument:
        return cls.model_validate(data)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump back to plain JSON, omitting fields the input never had."""
        return self.model_dump(mode="json", exclude_unset=True)


@dataclass
class RewriteReport:
    """What a single walker pass changed."""

    rewritten: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # malformed or unclassified
    projection_name_removed: bool = False


def _strip_projection_name(style: StyleDocument) -> bool:
    projection = style.projection
    if not isinstance(projection, Projection) or "name" not in projection.model_fields_set:
        return False
    style.projection = Projection.model_validate(
        projection.model_dump(exclude={"name"}, exclude_unset=True)
    )
    return True


def _rewrite_one(
    raw: str,
    role: ResourceKind,
    access_token: str,
    label: str,
    report: RewriteReport,
) -> str | None:
    try:
        rewritten = rewrite_reference(raw, role, access_token)
    except MalformedLocatorError:
        logger.debug("Leaving malformed reference at %s unchanged: %s", label, raw)
        report.skipped.append(label)
        return None
    if rewritten is None:
        logger.debug("No rewrite rule for reference at %s: %s", label, raw)
        report.skipped.append(label)
        return None
    report.rewritten.append(label)
    return rewritten


def apply_rewrites(style: StyleDocument, access_token: str) -> RewriteReport:
    """Rewrite every short-form reference in *style* in place.

    Returns a :class:`RewriteReport` naming the fields that changed.
    """
    report = RewriteReport()
    report.projection_name_removed = _strip_projection_name(style)

    for source_id, source in style.sources.items():
        if not isinstance(source, SourceDescriptor) or not isinstance(source.url, str):
            continue
        if is_proprietary_reference(source.url):
            new_url = _rewrite_one(
                source.url, ResourceKind.SOURCE, access_token, f"sources.{source_id}.url", report
            )
            if new_url is not None:
                source.url = new_url

    # Structured sprites are left alone.
    sprite = style.sprite
    if isinstance(sprite, str) and is_proprietary_reference(sprite):
        new_sprite = _rewrite_one(sprite, ResourceKind.SPRITE, access_token, "sprite", report)
        if new_sprite is not None:
            style.sprite = new_sprite

    if isinstance(style.glyphs, str) and is_proprietary_reference(style.glyphs):
        new_glyphs = _rewrite_one(style.glyphs, ResourceKind.GLYPHS, access_token, "glyphs", report)
        if new_glyphs is not None:
            style.glyphs = new_glyphs

    logger.debug(
        "Rewrote %d reference(s), skipped %d", len(report.rewritten), len(report.skipped)
    )
    return report


def rewrite_style_document(style: StyleDocument, access_token: str) -> StyleDocument:
    """Rewrite *style* in place and return it.

    Strips ``projection.name``, then resolves ``mapbox:`` references in
    ``sources[*].url``, a string ``sprite``, and ``glyphs``. Running it
    again on the result changes nothing.
    """
    apply_rewrites(style, access_token)
    return style
