"""Locator parsing — split short-form ``scheme://`` references into parts.

Pure functions, no infrastructure dependencies. Consumed by the endpoint
rewriter once per reference and discarded afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

PROPRIETARY_PREFIX = "mapbox:"

# scheme://authority/path?query — path and query are both optional.
_LOCATOR_PATTERN = re.compile(r"^(\w+)://([^/?]*)(/[^?]+)?\??(.+)?")

_ACCESS_TOKEN_PATTERN = re.compile(r"access_token=([^&]+)")
_REDACT_PATTERN = re.compile(r"(access_token=)[^&\s]+")


class MalformedLocatorError(ValueError):
    """Raised when a string does not have the ``scheme://...`` shape."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Unable to parse locator: {raw!r}")
        self.raw = raw


@dataclass(frozen=True)
class ParsedLocator:
    """Structural parts of a single locator string."""

    scheme: str
    authority: str  # owner/username segment, may be empty
    path: str = "/"
    params: tuple[str, ...] = ()  # raw key=value fragments, original order


def parse_locator(raw: str) -> ParsedLocator:
    """Decompose *raw* into scheme, authority, path, and query fragments.

    Raises :class:`MalformedLocatorError` when *raw* has no ``scheme://``
    structure. Callers must not guess a fallback.
    """
    match = _LOCATOR_PATTERN.match(raw)
    if match is None:
        raise MalformedLocatorError(raw)
    scheme, authority, path, query = match.groups()
    return ParsedLocator(
        scheme=scheme,
        authority=authority,
        path=path or "/",
        params=tuple(query.split("&")) if query else (),
    )


def is_proprietary_reference(url: str) -> bool:
    """True iff *url* starts with the literal ``mapbox:`` prefix."""
    return url.startswith(PROPRIETARY_PREFIX)


def extract_access_token(url: str) -> str:
    """Return the ``access_token`` query value of a style URL, or ``""``."""
    match = _ACCESS_TOKEN_PATTERN.search(url)
    return match.group(1) if match else ""


def redact_access_token(text: str) -> str:
    """Mask every ``access_token=...`` value in *text* for logs and errors."""
    return _REDACT_PATTERN.sub(r"\1***", text)
