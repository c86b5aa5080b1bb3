"""Expose settings metadata consumed by billing and document front-ends.

Clients use these endpoints to populate currency pickers and tax preset
selectors without duplicating the YAML settings.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from invoicecalc.backend.app.services.calculators import format_percentage
from invoicecalc.backend.config.settings import Settings, TaxPreset, load_settings
from invoicecalc.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the active settings."""

    settings = load_settings()
    return {
        "version": get_project_version(),
        "default_currency": settings.defaults.currency,
    }


def _serialise_preset(preset: TaxPreset) -> dict[str, Any]:
    return {
        "id": preset.id,
        "label": preset.label,
        "rate": str(preset.rate),
        "rate_label": format_percentage(preset.rate),
    }


def _serialise_settings(settings: Settings) -> dict[str, Any]:
    defaults = settings.defaults
    return {
        "defaults": {
            "currency": defaults.currency,
            "culture": defaults.culture,
            "tax_rate": str(defaults.tax_rate),
        },
        "currencies": [
            currency.model_dump(mode="json") for currency in settings.currencies
        ],
        "tax_presets": [_serialise_preset(preset) for preset in settings.tax_presets],
    }


@blueprint.get("")
def get_configuration():
    """Return defaults, supported currencies and tax presets."""

    payload = {"version": get_project_version(), **_serialise_settings(load_settings())}
    return jsonify(payload)


@blueprint.get("/tax-presets")
def list_tax_presets():
    """Return the configured tax presets."""

    settings = load_settings()
    return jsonify(
        {"tax_presets": [_serialise_preset(preset) for preset in settings.tax_presets]}
    )


__all__ = ["blueprint", "get_configuration_metadata"]
