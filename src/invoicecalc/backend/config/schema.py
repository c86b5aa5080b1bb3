"""Pydantic models describing the invoice settings schema."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")
_CULTURE_CODE = re.compile(r"^[a-z]{2,3}-[A-Z]{2}$")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


def _validate_culture(value: str) -> str:
    if not _CULTURE_CODE.match(value):
        raise ConfigurationError(
            f"Culture codes must look like 'en-SG', found '{value}'"
        )
    return value


def _check_rate(rate: Decimal, scope: str) -> None:
    if not rate.is_finite() or rate < 0 or rate > 100:
        raise ConfigurationError(f"{scope} must be between 0 and 100")


class CurrencyConfig(ImmutableModel):
    """A currency invoices may be issued in, with its default culture."""

    code: str
    culture: str
    name: str = ""

    @field_validator("code", mode="before")
    @classmethod
    def _normalise_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if not _CURRENCY_CODE.match(value):
                raise ConfigurationError(
                    f"Currency codes must be three letters, found '{value}'"
                )
        return value

    @field_validator("culture")
    @classmethod
    def _check_culture(cls, value: str) -> str:
        return _validate_culture(value)


class TaxPreset(ImmutableModel):
    """A named tax rate callers can select instead of sending a raw rate."""

    id: str = Field(min_length=1)
    label: str
    rate: Decimal

    @model_validator(mode="after")
    def _validate_rate(self) -> Self:
        _check_rate(self.rate, f"Tax preset '{self.id}' rate")
        return self


class DefaultsConfig(ImmutableModel):
    """Values applied when a request omits currency, culture or tax rate."""

    currency: str
    culture: str
    tax_rate: Decimal

    @field_validator("currency", mode="before")
    @classmethod
    def _normalise_currency(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("culture")
    @classmethod
    def _check_culture(cls, value: str) -> str:
        return _validate_culture(value)

    @model_validator(mode="after")
    def _validate_tax_rate(self) -> Self:
        _check_rate(self.tax_rate, "Default tax rate")
        return self


class Settings(ImmutableModel):
    """Complete runtime settings for invoice calculations."""

    defaults: DefaultsConfig
    currencies: tuple[CurrencyConfig, ...]
    tax_presets: tuple[TaxPreset, ...] = ()

    @model_validator(mode="after")
    def _require_currencies(self) -> Self:
        if not self.currencies:
            raise ConfigurationError("At least one currency must be configured")
        return self

    def get_currency(self, code: str) -> CurrencyConfig:
        """Return the currency configured for ``code``."""

        normalised = code.strip().upper()
        for currency in self.currencies:
            if currency.code == normalised:
                return currency
        raise KeyError(code)

    def get_tax_preset(self, preset_id: str) -> TaxPreset:
        """Return the tax preset identified by ``preset_id``."""

        for preset in self.tax_presets:
            if preset.id == preset_id:
                return preset
        raise KeyError(preset_id)


__all__ = [
    "ConfigurationError",
    "CurrencyConfig",
    "DefaultsConfig",
    "ImmutableModel",
    "Settings",
    "TaxPreset",
]
