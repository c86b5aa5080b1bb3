"""Orchestrate request validation, settings resolution, and invoice calculations.

The calculation service turns loosely typed payloads into :class:`Invoice`
records, resolves the tax rate and currency against the YAML settings, and
hands the invoice to the calculation engine. Profiling hooks and payload
validation live here so the engine itself stays a small set of pure
functions.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from time import perf_counter
from typing import Any, Literal

from pydantic import ValidationError

from invoicecalc.backend.app.models import (
    Client,
    Invoice,
    InvoiceCalculationResponse,
    InvoiceItem,
    InvoiceRequest,
    format_validation_error,
)
from invoicecalc.backend.config.settings import Settings, load_settings

from .calculators import calculate_invoice_totals, format_percentage

_LOGGER = logging.getLogger(__name__)

_PROFILE_ENV = "INVOICECALC_PROFILE_CALCULATIONS"

TaxRateSource = Literal["request", "preset", "default"]


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(_PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


@dataclass(frozen=True)
class ResolvedTaxRate:
    """Tax rate chosen for an invoice together with where it came from."""

    rate: Decimal
    source: TaxRateSource
    preset_id: str | None = None


def _resolve_tax_rate(request: InvoiceRequest, settings: Settings) -> ResolvedTaxRate:
    if request.tax_rate is not None:
        return ResolvedTaxRate(rate=request.tax_rate, source="request")

    if request.tax_preset:
        try:
            preset = settings.get_tax_preset(request.tax_preset)
        except KeyError as exc:
            raise ValueError("Unknown tax preset selection") from exc
        return ResolvedTaxRate(rate=preset.rate, source="preset", preset_id=preset.id)

    return ResolvedTaxRate(rate=settings.defaults.tax_rate, source="default")


def _resolve_currency(request: InvoiceRequest, settings: Settings) -> tuple[str, str]:
    code = request.currency or settings.defaults.currency
    try:
        currency = settings.get_currency(code)
    except KeyError as exc:
        raise ValueError(f"Unsupported currency '{code}'") from exc

    if request.culture:
        culture = request.culture
    elif currency.code == settings.defaults.currency:
        culture = settings.defaults.culture
    else:
        culture = currency.culture
    return currency.code, culture


def _build_invoice(
    request: InvoiceRequest, settings: Settings, tax_rate: ResolvedTaxRate
) -> Invoice:
    currency, culture = _resolve_currency(request, settings)

    items: list[InvoiceItem] | None = None
    if request.items is not None:
        items = [
            InvoiceItem(
                description=entry.description,
                quantity=entry.quantity,
                unit_price=entry.unit_price,
            )
            for entry in request.items
        ]

    invoice = Invoice(
        invoice_id=request.invoice_id,
        client=Client(name=request.client.name),
        items=items,  # type: ignore[arg-type]
        tax_rate=tax_rate.rate,
        currency=currency,
        culture=culture,
    )
    if request.invoice_date is not None:
        invoice.invoice_date = request.invoice_date
    return invoice


def _validate_request(payload: Mapping[str, Any] | InvoiceRequest) -> InvoiceRequest:
    if isinstance(payload, InvoiceRequest):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return InvoiceRequest.model_validate(data)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _construct_response(
    invoice: Invoice, tax_rate: ResolvedTaxRate
) -> InvoiceCalculationResponse:
    return InvoiceCalculationResponse.model_validate(
        {
            "invoice": {
                "invoice_id": invoice.invoice_id,
                "client": {"name": invoice.client.name},
                "currency": invoice.currency,
                "culture": invoice.culture,
                "tax_rate": invoice.tax_rate,
                "invoice_date": invoice.invoice_date,
            },
            "items": [
                {
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "line_total": item.line_total,
                }
                for item in invoice.items
            ],
            "totals": {
                "subtotal": invoice.subtotal,
                "tax_amount": invoice.tax_amount,
                "total": invoice.total,
            },
            "meta": {
                "tax_rate_source": tax_rate.source,
                "tax_rate_label": format_percentage(tax_rate.rate),
                "tax_preset": tax_rate.preset_id,
            },
        }
    )


def calculate_invoice(
    payload: Mapping[str, Any] | InvoiceRequest,
) -> dict[str, Any]:
    """Compute invoice totals for the provided payload.

    Engine errors (:class:`~invoicecalc.backend.app.errors.InvalidArgumentError`)
    propagate unchanged; payload and settings problems surface as
    :class:`ValueError`.
    """

    request_model = _validate_request(payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    settings = load_settings()

    with _profile_section("resolve", timings):
        tax_rate = _resolve_tax_rate(request_model, settings)
        invoice = _build_invoice(request_model, settings, tax_rate)

    with _profile_section("totals", timings):
        calculate_invoice_totals(invoice)

    _LOGGER.debug(
        "Invoice %r totals: subtotal=%s tax=%s total=%s (%s, rate %s from %s)",
        invoice.invoice_id,
        invoice.subtotal,
        invoice.tax_amount,
        invoice.total,
        invoice.currency,
        invoice.tax_rate,
        tax_rate.source,
    )

    with _profile_section("response", timings):
        response_model = _construct_response(invoice, tax_rate)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_invoice timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = ["ResolvedTaxRate", "calculate_invoice"]
