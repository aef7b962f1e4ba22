"""Configuration file management for spendbook."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendbook.domain.filters import SortKey
from spendbook.domain.models import DEFAULT_CATEGORIES, DEFAULT_INCOME_SOURCES, DEFAULT_PAYMENT_MODES


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    currency: str = "$"
    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    payment_modes: tuple[str, ...] = DEFAULT_PAYMENT_MODES
    income_sources: tuple[str, ...] = DEFAULT_INCOME_SOURCES
    default_sort: SortKey = SortKey.DATE_DESC
    log_level: str = "WARNING"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendbook" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the config dictionary written by 'spendbook init'."""
    defaults = Settings()
    return {
        "currency": defaults.currency,
        "categories": list(defaults.categories),
        "payment_modes": list(defaults.payment_modes),
        "income_sources": list(defaults.income_sources),
        "default_sort": defaults.default_sort.value,
        "log_level": defaults.log_level,
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _string_list(config: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    values = config.get(key)
    if not isinstance(values, list):
        return default
    cleaned = tuple(v.strip() for v in values if isinstance(v, str) and v.strip())
    return cleaned or default


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Merge config file values over the defaults.

    Args:
        config: Configuration dictionary (unknown keys are ignored).

    Returns:
        Settings with defaults for missing or malformed values.
    """
    defaults = Settings()
    currency = config.get("currency")
    log_level = config.get("log_level")

    return Settings(
        currency=currency if isinstance(currency, str) and currency else defaults.currency,
        categories=_string_list(config, "categories", defaults.categories),
        payment_modes=_string_list(config, "payment_modes", defaults.payment_modes),
        income_sources=_string_list(config, "income_sources", defaults.income_sources),
        default_sort=SortKey.parse(config.get("default_sort")),
        log_level=log_level.upper() if isinstance(log_level, str) and log_level else defaults.log_level,
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when the config file doesn't exist.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings.

    Raises:
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return settings_from_config(config)
