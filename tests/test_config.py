"""Tests for spendbook.config."""

import stat
import tomllib
from pathlib import Path

import pytest

from spendbook.config import (
    Settings,
    create_default_config,
    get_config_path,
    load_config,
    load_settings,
    save_config,
    settings_from_config,
)
from spendbook.domain.filters import SortKey
from spendbook.domain.models import DEFAULT_CATEGORIES


class TestConfigPath:
    """Tests for get_config_path."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "spendbook" / "config.toml"

    def test_falls_back_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should use ~/.config when XDG_CONFIG_HOME is unset."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_path() == tmp_path / ".config" / "spendbook" / "config.toml"


class TestSaveAndLoad:
    """Tests for save_config and load_config."""

    def test_round_trip_with_private_permissions(self, tmp_path: Path) -> None:
        """Should write TOML readable only by the owner."""
        path = tmp_path / "sub" / "config.toml"

        save_config({"currency": "€", "categories": ["Food"]}, path)

        assert load_config(path) == {"currency": "€", "categories": ["Food"]}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Should raise when the file doesn't exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.toml")

    def test_default_config_loads_as_defaults(self, tmp_path: Path) -> None:
        """Should write a file that loads back to the default settings."""
        path = tmp_path / "config.toml"

        create_default_config(path)

        assert load_settings(path) == Settings()


class TestSettings:
    """Tests for settings_from_config and load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to the defaults."""
        settings = load_settings(tmp_path / "absent.toml")

        assert settings == Settings()
        assert settings.categories == DEFAULT_CATEGORIES
        assert settings.default_sort is SortKey.DATE_DESC

    def test_values_override_defaults(self) -> None:
        """Should take values from the file."""
        settings = settings_from_config(
            {
                "currency": "£",
                "categories": ["Food", " Pets "],
                "default_sort": "amountDesc",
                "log_level": "debug",
            }
        )

        assert settings.currency == "£"
        assert settings.categories == ("Food", "Pets")
        assert settings.default_sort is SortKey.AMOUNT_DESC
        assert settings.log_level == "DEBUG"
        assert settings.payment_modes == Settings().payment_modes

    def test_malformed_values_use_defaults(self) -> None:
        """Should ignore values of the wrong shape."""
        settings = settings_from_config(
            {
                "currency": 5,
                "categories": "Food",
                "payment_modes": [1, "", "  "],
                "default_sort": "sideways",
                "unknown": True,
            }
        )

        assert settings == Settings()

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Should surface TOML syntax errors."""
        path = tmp_path / "config.toml"
        path.write_text("currency = [unclosed\n")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_settings(path)
