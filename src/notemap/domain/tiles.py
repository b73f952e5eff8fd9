"""Tile configuration — choose a style URL or synthesize a raster style.

A map view is configured with a list of tile URLs (and optionally a dark
variant). Zero URLs means the default basemap; one non-template URL is a
style document URL; anything else becomes a raster-only style.
"""

from __future__ import annotations

from collections.abc import Sequence

from notemap.domain.style import SourceDescriptor, StyleDocument

DEFAULT_LIGHT_STYLE = "https://tiles.openfreemap.org/styles/bright"
DEFAULT_DARK_STYLE = "https://tiles.openfreemap.org/styles/dark"

RASTER_TILE_SIZE = 256
STYLE_VERSION = 8

_TEMPLATE_PLACEHOLDERS = ("{z}", "{x}", "{y}")


def is_tile_template_url(url: str) -> bool:
    """True if *url* contains a ``{z}``, ``{x}`` or ``{y}`` placeholder."""
    return any(placeholder in url for placeholder in _TEMPLATE_PLACEHOLDERS)


def active_tiles(tiles: Sequence[str], tiles_dark: Sequence[str], *, dark: bool) -> list[str]:
    """Dark tiles win only in dark mode and only when configured."""
    if dark and tiles_dark:
        return list(tiles_dark)
    return list(tiles)


def select_style_url(
    tiles: Sequence[str],
    tiles_dark: Sequence[str] = (),
    *,
    dark: bool = False,
    light_style: str = DEFAULT_LIGHT_STYLE,
    dark_style: str = DEFAULT_DARK_STYLE,
) -> str | None:
    """Return the style URL to load, or None when a raster style is needed."""
    urls = active_tiles(tiles, tiles_dark, dark=dark)
    if not urls:
        return dark_style if dark else light_style
    if len(urls) == 1 and not is_tile_template_url(urls[0]):
        return urls[0]
    return None


def build_raster_style(tile_urls: Sequence[str]) -> StyleDocument:
    """Build a style with one raster source and layer per tile URL."""
    sources: dict[str, SourceDescriptor] = {}
    layers: list[dict[str, str]] = []
    for index, tile_url in enumerate(tile_urls):
        source_id = f"custom-tiles-{index}"
        sources[source_id] = SourceDescriptor(
            type="raster", tiles=[tile_url], tileSize=RASTER_TILE_SIZE
        )
        layers.append({"id": f"custom-layer-{index}", "type": "raster", "source": source_id})
    return StyleDocument(version=STYLE_VERSION, sources=sources, layers=layers)
