"""Subtotal, tax and total calculators for invoices.

Every amount flowing through this module is a :class:`~decimal.Decimal`. Sums
are exact; only the tax amount is rounded, to the currency's two minor-unit
places using round-half-away-from-zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from invoicecalc.backend.app.errors import ArgumentRangeError, MissingArgumentError

from .utils import (
    HUNDRED,
    ZERO,
    exact_arithmetic,
    line_amount,
    round_currency,
    to_decimal,
)

if TYPE_CHECKING:  # pragma: no cover - only for static type checkers
    from invoicecalc.backend.app.models import Invoice, InvoiceItem

SUBTOTAL_NEGATIVE = "Subtotal cannot be negative"
TAX_AMOUNT_NEGATIVE = "Tax amount cannot be negative"
TAX_RATE_OUT_OF_RANGE = "Tax rate must be between 0 and 100"


def calculate_subtotal(items: Iterable[InvoiceItem] | None) -> Decimal:
    """Return the exact sum of ``quantity * unit_price`` across ``items``.

    Line items are not range-checked: negative quantities or prices flow
    straight into the sum.
    """

    if items is None:
        raise MissingArgumentError("items")

    subtotal = ZERO
    with exact_arithmetic():
        for item in items:
            subtotal += line_amount(item.quantity, item.unit_price)
    return subtotal


def calculate_tax(subtotal: Any, tax_rate: Any) -> Decimal:
    """Return ``subtotal * tax_rate / 100`` rounded to two decimal places."""

    subtotal = to_decimal(subtotal, "subtotal")
    tax_rate = to_decimal(tax_rate, "tax_rate")

    if subtotal < 0:
        raise ArgumentRangeError(SUBTOTAL_NEGATIVE, "subtotal")
    if tax_rate < 0 or tax_rate > HUNDRED:
        raise ArgumentRangeError(TAX_RATE_OUT_OF_RANGE, "tax_rate")

    with exact_arithmetic():
        return round_currency(subtotal * tax_rate.scaleb(-2))


def calculate_total(subtotal: Any, tax_amount: Any) -> Decimal:
    """Return ``subtotal + tax_amount`` without further rounding."""

    subtotal = to_decimal(subtotal, "subtotal")
    tax_amount = to_decimal(tax_amount, "tax_amount")

    if subtotal < 0:
        raise ArgumentRangeError(SUBTOTAL_NEGATIVE, "subtotal")
    if tax_amount < 0:
        raise ArgumentRangeError(TAX_AMOUNT_NEGATIVE, "tax_amount")

    with exact_arithmetic():
        return subtotal + tax_amount


def calculate_invoice_totals(invoice: Invoice | None) -> None:
    """Populate ``subtotal``, ``tax_amount`` and ``total`` on ``invoice`` in place.

    Each field is assigned as soon as it is computed. When a later step raises,
    the fields written by earlier steps keep their new values and the
    remaining ones are left untouched.
    """

    if invoice is None:
        raise MissingArgumentError("invoice")

    invoice.subtotal = calculate_subtotal(invoice.items)
    invoice.tax_amount = calculate_tax(invoice.subtotal, invoice.tax_rate)
    invoice.total = calculate_total(invoice.subtotal, invoice.tax_amount)


__all__ = [
    "SUBTOTAL_NEGATIVE",
    "TAX_AMOUNT_NEGATIVE",
    "TAX_RATE_OUT_OF_RANGE",
    "calculate_invoice_totals",
    "calculate_subtotal",
    "calculate_tax",
    "calculate_total",
]
