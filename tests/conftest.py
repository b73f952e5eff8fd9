"""Shared pytest fixtures and test helpers for notemap tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from notemap.config.settings import NotemapSettings
from notemap.infrastructure.fetch import StyleFetcher

TOKEN = "TKN"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer env vars from leaking into settings discovery."""
    for name in ("NOTEMAP_CONFIG", "NOTEMAP_ACCESS_TOKEN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory used as CWD so no real config is found."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> NotemapSettings:
    return NotemapSettings.from_cli(project_root=project_root)


@pytest.fixture
def mapbox_style() -> dict[str, Any]:
    """A style document using every kind of short-form reference."""
    return {
        "version": 8,
        "name": "Streets",
        "projection": {"name": "globe", "type": "globe"},
        "sources": {
            "a": {"type": "vector", "url": "mapbox://user.tileset"},
            "hillshade": {"type": "raster-dem", "url": "https://tiles.example.com/dem.json"},
        },
        "sprite": "mapbox://sprites/user/style",
        "glyphs": "mapbox://fonts/user/{fontstack}/{range}.pbf",
        "layers": [{"id": "bg", "type": "background"}],
    }


def write_config(root: Path, body: str) -> Path:
    """Write a notemap.toml under *root* and return its path."""
    path = root / "notemap.toml"
    path.write_text(body, encoding="utf-8")
    return path


def mock_fetcher(handler: Callable[[httpx.Request], httpx.Response]) -> StyleFetcher:
    """StyleFetcher backed by ``httpx.MockTransport``."""
    return StyleFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))
