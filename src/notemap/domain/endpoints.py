"""Endpoint rewriting — turn short-form references into HTTPS endpoints.

Classification is an ordered list of ``(predicate, kind)`` rules evaluated
top-down; the first match wins. Each kind then has its own path template
against the fixed API host.

INVARIANT: the access token is always the last query parameter.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from notemap.domain.locators import ParsedLocator, parse_locator
from notemap.domain.types import ResourceKind

API_BASE_URL = "https://api.mapbox.com"
RETINA_MARKER = "@2x"

_API = parse_locator(API_BASE_URL)

ClassificationRule = tuple[Callable[[str, ResourceKind | None], bool], ResourceKind]

CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    (lambda raw, _role: "/styles/" in raw and "/sprite" not in raw, ResourceKind.STYLE),
    (lambda raw, _role: "/sprites/" in raw, ResourceKind.SPRITE),
    (lambda raw, _role: "/fonts/" in raw, ResourceKind.GLYPHS),
    (lambda raw, _role: "/v4/" in raw, ResourceKind.SOURCE),
    (lambda _raw, role: role is ResourceKind.SOURCE, ResourceKind.SOURCE),
)


def classify_reference(raw: str, role: ResourceKind | None = None) -> ResourceKind | None:
    """Pick the resource kind for *raw*, or None when no rule applies.

    *role* is the logical role of the field holding the reference; it only
    matters once every path-based rule has missed.
    """
    for predicate, kind in CLASSIFICATION_RULES:
        if predicate(raw, role):
            return kind
    return None


def format_endpoint(locator: ParsedLocator, access_token: str) -> str:
    """Render *locator* against the API host with the token appended."""
    params = [*locator.params, f"access_token={access_token}"]
    query = f"?{'&'.join(params)}" if params else ""
    return f"{_API.scheme}://{_API.authority}{locator.path}{query}"


def _sprite_path(locator: ParsedLocator, raw: str) -> str:
    segments = [part for part in locator.path.split("/") if part]
    owner = segments[0] if segments else ""
    style_id = segments[1].split(RETINA_MARKER)[0] if len(segments) > 1 else ""

    if owner and style_id:
        # Trailing draft/version segments are dropped.
        retina = RETINA_MARKER if RETINA_MARKER in raw else ""
        return f"/styles/v1/{owner}/{style_id}/sprite{retina}"

    pieces = locator.path.split(".")
    base = pieces[0]
    extension = pieces[1] if len(pieces) > 1 and pieces[1] else "json"
    retina = ""
    if RETINA_MARKER in base:
        base = base.split(RETINA_MARKER)[0]
        retina = RETINA_MARKER
    return f"/styles/v1{base.rstrip('/')}/sprite{retina}.{extension}"


def build_endpoint(
    locator: ParsedLocator,
    kind: ResourceKind,
    access_token: str,
    *,
    raw: str = "",
) -> str:
    """Build the HTTPS endpoint for an already-parsed locator.

    Args:
        locator: Parsed form of the original reference.
        kind: Resource kind selected by :func:`classify_reference`.
        access_token: Token appended as ``access_token=...``. Not validated.
        raw: Original reference string; sprites look for ``@2x`` in it.
    """
    if kind is ResourceKind.STYLE:
        rewritten = replace(locator, path=f"/styles/v1{locator.path}")
    elif kind is ResourceKind.GLYPHS:
        rewritten = replace(locator, path=f"/fonts/v1{locator.path}")
    elif kind is ResourceKind.SOURCE:
        rewritten = replace(
            locator,
            path=f"/v4/{locator.authority}.json",
            params=(*locator.params, "secure"),
        )
    else:
        rewritten = replace(locator, path=_sprite_path(locator, raw))
    return format_endpoint(rewritten, access_token)


def rewrite_reference(
    raw: str,
    role: ResourceKind | None,
    access_token: str,
) -> str | None:
    """Rewrite a single reference string.

    Returns None when no classification rule applies (pass-through).
    Propagates :class:`~notemap.domain.locators.MalformedLocatorError`
    when *raw* cannot be parsed.
    """
    kind = classify_reference(raw, role)
    if kind is None:
        return None
    return build_endpoint(parse_locator(raw), kind, access_token, raw=raw)
