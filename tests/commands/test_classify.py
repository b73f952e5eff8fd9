"""Tests for the classify CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from notemap.cli import cli


@pytest.mark.usefixtures("project_root")
class TestClassifyCommand:
    def test_classify_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["classify", "mapbox://fonts/user/{fontstack}/{range}.pbf", "-t", "T"])
        assert result.exit_code == 0, result.output
        assert "kind: glyphs" in result.output
        assert "https://api.mapbox.com/fonts/v1/user/{fontstack}/{range}.pbf?access_token=T" in result.output

    def test_classify_quiet_prints_endpoint(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "classify", "mapbox://sprites/user/streets@2x", "-t", "T"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == (
            "https://api.mapbox.com/styles/v1/user/streets/sprite@2x?access_token=T"
        )

    def test_classify_with_role(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "classify", "mapbox://user.tileset", "--role", "source", "-t", "T"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["kind"] == "source"
        assert data["endpoint"] == "https://api.mapbox.com/v4/user.tileset.json?secure&access_token=T"

    def test_classify_invalid_role(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["classify", "mapbox://x", "--role", "layer"])
        assert result.exit_code == 2

    def test_classify_malformed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["classify", "mapbox:/x", "--role", "source"])
        assert result.exit_code == 1
        assert "Unable to parse locator" in result.output
