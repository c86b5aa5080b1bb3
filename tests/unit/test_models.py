"""Unit tests for the invoice records."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from invoicecalc.backend.app.models import Client, Invoice, InvoiceItem


def test_line_total_multiplies_quantity_and_price() -> None:
    item = InvoiceItem(quantity=3, unit_price=Decimal("25.50"))

    assert item.line_total == Decimal("76.50")


def test_line_total_with_zero_quantity_is_zero() -> None:
    item = InvoiceItem(quantity=0, unit_price=Decimal("100.00"))

    assert item.line_total == Decimal("0.00")


def test_line_total_with_zero_price_is_zero() -> None:
    item = InvoiceItem(quantity=5, unit_price=Decimal("0.00"))

    assert item.line_total == Decimal("0.00")


def test_line_total_follows_updated_fields() -> None:
    item = InvoiceItem(quantity=1, unit_price=Decimal("10.00"))
    item.quantity = 4

    assert item.line_total == Decimal("40.00")


def test_invoice_defaults() -> None:
    invoice = Invoice()

    assert invoice.items == []
    assert invoice.client == Client(name="")
    assert invoice.subtotal == invoice.tax_amount == invoice.total == Decimal("0.00")
    assert invoice.currency == "SGD"
    assert invoice.culture == "en-SG"
    assert invoice.invoice_date == date.today()


def test_invoices_do_not_share_item_lists() -> None:
    first = Invoice()
    second = Invoice()
    first.items.append(InvoiceItem(quantity=1, unit_price=Decimal("1.00")))

    assert second.items == []


def test_line_total_converts_float_price_exactly() -> None:
    item = InvoiceItem(quantity=3, unit_price=0.1)  # type: ignore[arg-type]

    assert item.line_total == Decimal("0.3")
