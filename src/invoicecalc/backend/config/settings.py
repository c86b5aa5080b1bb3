"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    CurrencyConfig,
    DefaultsConfig,
    Settings,
    TaxPreset,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
SETTINGS_FILE = CONFIG_DIRECTORY / "settings.yaml"
SETTINGS_FILE_ENV = "INVOICECALC_SETTINGS_FILE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def settings_path() -> Path:
    """Return the settings file in effect, honouring the environment override."""

    override = os.getenv(SETTINGS_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return SETTINGS_FILE


def load_settings_file(path: Path) -> Settings:
    """Parse and validate the settings stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    raw_settings = _load_yaml(path)

    try:
        return Settings.model_validate(raw_settings)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed for {path.name}: {error}") from error


@lru_cache(maxsize=4)
def _cached_settings(path: Path) -> Settings:
    return load_settings_file(path)


def load_settings() -> Settings:
    """Load and cache the active settings."""

    return _cached_settings(settings_path())


def clear_settings_cache() -> None:
    """Forget previously loaded settings so the next call re-reads disk."""

    _cached_settings.cache_clear()


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "CurrencyConfig",
    "DefaultsConfig",
    "SETTINGS_FILE",
    "SETTINGS_FILE_ENV",
    "Settings",
    "TaxPreset",
    "clear_settings_cache",
    "load_settings",
    "load_settings_file",
    "settings_path",
]
