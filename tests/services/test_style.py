"""Tests for StyleService — rewrite, resolve, classify."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from notemap.config.settings import NotemapSettings
from notemap.domain.style import StyleDocument
from notemap.domain.tiles import DEFAULT_DARK_STYLE, DEFAULT_LIGHT_STYLE
from notemap.domain.types import ResourceKind
from notemap.services.style import StyleService
from tests.conftest import json_response, mock_fetcher, write_config

MAPBOX_STYLE_URL = "https://api.mapbox.com/styles/v1/user/streets?access_token=pk.abc"


def _settings(root: Path, toml: str = "") -> NotemapSettings:
    if toml:
        write_config(root, toml)
    return NotemapSettings.from_cli(project_root=root)


# ---------------------------------------------------------------------------
# rewrite
# ---------------------------------------------------------------------------


class TestRewrite:
    def test_rewrite_dict(self, settings: NotemapSettings, mapbox_style: dict[str, Any]) -> None:
        result = StyleService(settings).rewrite(mapbox_style, "TKN")
        assert result.ok, result.error
        assert result.op == "rewrite_style"
        style = result.data["style"]
        assert style["sources"]["a"]["url"] == (
            "https://api.mapbox.com/v4/user.tileset.json?secure&access_token=TKN"
        )
        assert style["projection"] == {"type": "globe"}
        assert result.data["rewritten"] == ["sources.a.url", "sprite", "glyphs"]
        assert result.data["projection_name_removed"] is True
        assert result.data["sprite"] == "reference"
        assert result.warnings == []

    def test_rewrite_model_in_place(self, settings: NotemapSettings, mapbox_style: dict[str, Any]) -> None:
        doc = StyleDocument.from_json_dict(mapbox_style)
        StyleService(settings).rewrite(doc, "TKN")
        assert doc.sprite == "https://api.mapbox.com/styles/v1/user/style/sprite?access_token=TKN"

    def test_skipped_references_warn(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).rewrite(
            {"sources": {"bad": {"url": "mapbox:/onlyoneslash"}}}, "TKN"
        )
        assert result.ok
        assert result.data["skipped"] == ["sources.bad.url"]
        assert result.warnings == ["Left reference unchanged at sources.bad.url"]
        assert result.data["style"]["sources"]["bad"]["url"] == "mapbox:/onlyoneslash"

    def test_empty_token_warns(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).rewrite({"glyphs": "mapbox://fonts/u/{fontstack}/{range}.pbf"}, "")
        assert result.ok
        assert result.data["style"]["glyphs"].endswith("?access_token=")
        assert any("Empty access token" in w for w in result.warnings)

    def test_sprite_object_passes_through(self, settings: NotemapSettings) -> None:
        sprite = {"default": "mapbox://sprites/u/s"}
        result = StyleService(settings).rewrite({"sprite": sprite}, "TKN")
        assert result.ok
        assert result.data["style"] == {"sprite": sprite}
        assert result.data["sprite"] == "structured"

    def test_non_string_source_url_passes_through(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).rewrite(
            {"sources": {"a": {"url": 5}, "b": {"url": "mapbox://u.t"}}}, "TKN"
        )
        assert result.ok
        assert result.data["style"]["sources"]["a"] == {"url": 5}
        assert result.data["rewritten"] == ["sources.b.url"]

    def test_non_string_projection_name_stripped(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).rewrite({"projection": {"name": 1}}, "TKN")
        assert result.ok
        assert result.data["style"] == {"projection": {}}
        assert result.data["projection_name_removed"] is True

    def test_invalid_style(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).rewrite({"sources": "not-a-mapping"}, "TKN")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_STYLE"


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_default_style_fetched_without_token(
        self, settings: NotemapSettings, mapbox_style: dict[str, Any]
    ) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return json_response(mapbox_style)

        result = StyleService(settings, fetcher=mock_fetcher(handler)).resolve()
        assert result.ok
        assert requested == [DEFAULT_LIGHT_STYLE]
        assert result.data["source"] == "fetched"
        # No token in the URL: the document is handed over untouched.
        assert result.data["style"] == mapbox_style
        assert result.data["rewritten"] == []

    def test_dark_default(self, settings: NotemapSettings) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return json_response({"version": 8})

        StyleService(settings, fetcher=mock_fetcher(handler)).resolve(dark=True)
        assert requested == [DEFAULT_DARK_STYLE]

    def test_mapbox_style_rewritten_with_url_token(
        self, project_root: Path, mapbox_style: dict[str, Any]
    ) -> None:
        settings = _settings(project_root, f'[map]\ntiles = ["{MAPBOX_STYLE_URL}"]\n')
        fetcher = mock_fetcher(lambda request: json_response(mapbox_style))
        result = StyleService(settings, fetcher=fetcher).resolve()
        assert result.ok
        assert result.data["source"] == "fetched"
        assert result.data["url"] == MAPBOX_STYLE_URL
        assert result.data["style"]["glyphs"] == (
            "https://api.mapbox.com/fonts/v1/user/{fontstack}/{range}.pbf?access_token=pk.abc"
        )
        assert result.data["rewritten"] == ["sources.a.url", "sprite", "glyphs"]

    def test_fetch_failure_falls_back_to_url(self, project_root: Path) -> None:
        settings = _settings(project_root, f'[map]\ntiles = ["{MAPBOX_STYLE_URL}"]\n')
        fetcher = mock_fetcher(lambda request: httpx.Response(503))
        result = StyleService(settings, fetcher=fetcher).resolve()
        assert result.ok
        assert result.data["source"] == "url"
        assert result.data["style"] == MAPBOX_STYLE_URL
        assert len(result.warnings) == 1
        assert "HTTP 503" in result.warnings[0]
        assert "pk.abc" not in result.warnings[0]

    def test_invalid_fetched_style_falls_back_to_url(self, project_root: Path) -> None:
        settings = _settings(project_root, f'[map]\ntiles = ["{MAPBOX_STYLE_URL}"]\n')
        fetcher = mock_fetcher(lambda request: json_response({"sources": []}))
        result = StyleService(settings, fetcher=fetcher).resolve()
        assert result.ok
        assert result.data["source"] == "url"

    def test_tile_templates_build_raster_style(self, project_root: Path) -> None:
        settings = _settings(
            project_root, '[map]\ntiles = ["https://tile.openstreetmap.org/{z}/{x}/{y}.png"]\n'
        )

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("raster styles are never fetched")

        result = StyleService(settings, fetcher=mock_fetcher(handler)).resolve()
        assert result.ok
        assert result.data["source"] == "raster"
        assert result.data["url"] is None
        assert list(result.data["style"]["sources"]) == ["custom-tiles-0"]


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


class TestClassify:
    def test_style_reference(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).classify("mapbox://styles/user/streets", access_token="TKN")
        assert result.ok
        assert result.data == {
            "reference": "mapbox://styles/user/streets",
            "proprietary": True,
            "kind": "style",
            "endpoint": "https://api.mapbox.com/styles/v1/user/streets?access_token=TKN",
        }

    def test_role_needed_for_bare_tileset(self, settings: NotemapSettings) -> None:
        service = StyleService(settings)
        assert service.classify("mapbox://user.tileset").data["kind"] is None
        with_role = service.classify("mapbox://user.tileset", role=ResourceKind.SOURCE)
        assert with_role.data["kind"] == "source"

    def test_non_proprietary_has_no_endpoint(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).classify("https://example.com/styles/x")
        assert result.ok
        assert result.data["proprietary"] is False
        assert result.data["kind"] == "style"
        assert result.data["endpoint"] is None

    def test_malformed(self, settings: NotemapSettings) -> None:
        result = StyleService(settings).classify("mapbox:/x", role=ResourceKind.SOURCE)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_LOCATOR"
