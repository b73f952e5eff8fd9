"""Tests for config file discovery."""

from pathlib import Path

import pytest

from notemap.config.discovery import CONFIG_ENV_VAR, find_config
from tests.conftest import write_config


class TestFindConfig:
    def test_not_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_found_in_start_dir(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, "")
        assert find_config(tmp_path) == path.resolve()

    def test_found_in_parent(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, "")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config(child) == path.resolve()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "elsewhere.toml"
        path.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert find_config(tmp_path / "nowhere") == path

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_config(tmp_path, "")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
