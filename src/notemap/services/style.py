"""StyleService — rewrite, resolve, and inspect map style documents.

``rewrite`` runs the reference walker over a style the caller already has.
``resolve`` reproduces what a map view does on load: pick the configured
style URL, fetch it, and rewrite it with the token carried by that URL.
Fetch failures fall back to handing the URL itself to the renderer.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from notemap.config.settings import NotemapSettings
from notemap.domain.endpoints import build_endpoint, classify_reference
from notemap.domain.locators import (
    MalformedLocatorError,
    extract_access_token,
    is_proprietary_reference,
    parse_locator,
)
from notemap.domain.style import StyleDocument, apply_rewrites
from notemap.domain.tiles import active_tiles, build_raster_style, select_style_url
from notemap.domain.types import ResourceKind
from notemap.infrastructure.fetch import StyleFetcher, StyleFetchError
from notemap.services.base import BaseService
from notemap.services.result import ServiceResult

logger = logging.getLogger(__name__)


class StyleService(BaseService):
    """Operations over map style documents."""

    def __init__(
        self,
        settings: NotemapSettings,
        *,
        fetcher: StyleFetcher | None = None,
    ) -> None:
        super().__init__(settings)
        self._fetcher = fetcher

    # ── rewrite ──────────────────────────────────────────────────────

    def rewrite(
        self,
        document: dict[str, Any] | StyleDocument,
        access_token: str,
    ) -> ServiceResult:
        """Resolve every ``mapbox:`` reference in *document*.

        An empty token is not rejected; endpoints then carry an empty
        ``access_token=`` parameter and a warning is attached.
        """
        op = "rewrite_style"
        if isinstance(document, StyleDocument):
            style = document
        else:
            try:
                style = StyleDocument.from_json_dict(document)
            except ValidationError as exc:
                return ServiceResult.failure(
                    op,
                    "INVALID_STYLE",
                    "Input is not a valid style document",
                    errors=exc.error_count(),
                )

        report = apply_rewrites(style, access_token)
        warnings = [f"Left reference unchanged at {label}" for label in report.skipped]
        if not access_token and report.rewritten:
            warnings.append("Empty access token: rewritten endpoints carry access_token=")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "style": style.to_json_dict(),
                "rewritten": report.rewritten,
                "skipped": report.skipped,
                "projection_name_removed": report.projection_name_removed,
                "sprite": style.sprite_variant.value,
            },
            warnings=warnings,
        )

    # ── resolve ──────────────────────────────────────────────────────

    def resolve(self, *, dark: bool = False) -> ServiceResult:
        """Produce the render configuration for the configured tiles.

        ``data["source"]`` tells where the style came from:
        ``"raster"`` (synthesized), ``"fetched"`` (remote JSON), or
        ``"url"`` (fetch failed, the URL is passed through).
        """
        op = "resolve_style"
        map_config = self.settings.map
        url = select_style_url(
            map_config.tiles,
            map_config.tiles_dark,
            dark=dark,
            light_style=map_config.light_style,
            dark_style=map_config.dark_style,
        )

        if url is None:
            tiles = active_tiles(map_config.tiles, map_config.tiles_dark, dark=dark)
            style = build_raster_style(tiles)
            logger.debug("Synthesized raster style from %d tile URL(s)", len(tiles))
            return ServiceResult(
                ok=True,
                op=op,
                data={"source": "raster", "url": None, "style": style.to_json_dict(), "rewritten": []},
            )

        try:
            payload = self._fetch(url)
        except StyleFetchError as exc:
            logger.warning("Falling back to style URL: %s", exc)
            return self._url_fallback(op, url, str(exc))

        access_token = extract_access_token(url)
        if not access_token:
            return ServiceResult(
                ok=True,
                op=op,
                data={"source": "fetched", "url": url, "style": payload, "rewritten": []},
            )

        result = self.rewrite(payload, access_token)
        if not result.ok:
            return self._url_fallback(op, url, "Fetched document is not a valid style")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": "fetched",
                "url": url,
                "style": result.data["style"],
                "rewritten": result.data["rewritten"],
            },
            warnings=result.warnings,
        )

    def _fetch(self, url: str) -> dict[str, Any]:
        if self._fetcher is not None:
            return self._fetcher.fetch(url)
        with StyleFetcher(self.settings.fetch) as fetcher:
            return fetcher.fetch(url)

    @staticmethod
    def _url_fallback(op: str, url: str, reason: str) -> ServiceResult:
        # The renderer loads the style URL itself; no rewriting happens.
        return ServiceResult(
            ok=True,
            op=op,
            data={"source": "url", "url": url, "style": url, "rewritten": []},
            warnings=[reason],
        )

    # ── classify ─────────────────────────────────────────────────────

    def classify(
        self,
        reference: str,
        *,
        role: ResourceKind | None = None,
        access_token: str = "",
    ) -> ServiceResult:
        """Show the resource kind and endpoint for a single reference."""
        op = "classify_reference"
        proprietary = is_proprietary_reference(reference)
        kind = classify_reference(reference, role)
        endpoint: str | None = None
        if proprietary and kind is not None:
            try:
                locator = parse_locator(reference)
            except MalformedLocatorError as exc:
                return ServiceResult.failure(
                    op, "MALFORMED_LOCATOR", str(exc), reference=reference
                )
            endpoint = build_endpoint(locator, kind, access_token, raw=reference)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "reference": reference,
                "proprietary": proprietary,
                "kind": kind.value if kind else None,
                "endpoint": endpoint,
            },
        )
