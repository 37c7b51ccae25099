"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

from pathlib import Path

import pytest
from pipmaster.core.paths import (
    APP_NAME,
    get_advisor_config_path,
    get_config_dir,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_config_dir falls back to ~/.config when XDG_CONFIG_HOME is unset."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_config_dir respects XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / APP_NAME

    def test_empty_xdg_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty XDG_CONFIG_HOME counts as unset."""
        monkeypatch.setenv("XDG_CONFIG_HOME", "")

        assert get_config_dir() == Path.home() / ".config" / APP_NAME


class TestConfigFiles:
    """Tests for file paths inside the config directory."""

    def test_advisor_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Advisor settings live in advisor.toml."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_advisor_config_path() == tmp_path / "pipmaster" / "advisor.toml"

    def test_user_theme_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Theme overrides live in theme.toml."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_user_theme_path() == tmp_path / "pipmaster" / "theme.toml"
