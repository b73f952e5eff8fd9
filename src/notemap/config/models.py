"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, notemap.toml only contains
overrides. A project with no config file gets the default basemap.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from notemap.domain.tiles import DEFAULT_DARK_STYLE, DEFAULT_LIGHT_STYLE

# --- notemap.toml sections ---


class MapConfig(BaseModel):
    """[map] section."""

    model_config = {"frozen": True}

    tiles: list[str] = Field(default_factory=list)
    tiles_dark: list[str] = Field(default_factory=list)
    light_style: str = DEFAULT_LIGHT_STYLE
    dark_style: str = DEFAULT_DARK_STYLE


class FetchConfig(BaseModel):
    """[fetch] section."""

    model_config = {"frozen": True}

    timeout_seconds: float = 10.0
    user_agent: str = "notemap"
