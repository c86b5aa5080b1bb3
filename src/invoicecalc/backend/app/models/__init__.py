"""Invoice records and the API models shared across the calculation services.

The records below are deliberately plain: they carry identity, client, dates
and currency information for downstream rendering, while the calculation
engine only ever reads ``items`` and ``tax_rate`` and writes the three result
fields. Request and response validation lives in :mod:`.api`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from invoicecalc.backend.app.services.calculators.utils import line_amount

from .api import (
    ClientInput,
    InvoiceCalculationResponse,
    InvoiceItemInput,
    InvoiceItemResult,
    InvoiceRequest,
    InvoiceSummary,
    InvoiceTotals,
    ResponseMeta,
    format_validation_error,
)

__all__ = [
    "Client",
    "ClientInput",
    "Invoice",
    "InvoiceCalculationResponse",
    "InvoiceItem",
    "InvoiceItemInput",
    "InvoiceItemResult",
    "InvoiceRequest",
    "InvoiceSummary",
    "InvoiceTotals",
    "ResponseMeta",
    "format_validation_error",
]


@dataclass
class Client:
    """The party an invoice is addressed to."""

    name: str = ""


@dataclass
class InvoiceItem:
    """A single line on an invoice."""

    description: str = ""
    quantity: int = 0
    unit_price: Decimal = Decimal("0.00")

    @property
    def line_total(self) -> Decimal:
        """Return ``quantity * unit_price`` computed exactly in decimal."""

        return line_amount(self.quantity, self.unit_price)


@dataclass
class Invoice:
    """A complete invoice, including the calculated result fields."""

    invoice_id: str = ""
    client: Client = field(default_factory=Client)
    items: list[InvoiceItem] = field(default_factory=list)
    tax_rate: Decimal = Decimal("0")
    invoice_date: date = field(default_factory=date.today)
    created_date: datetime = field(default_factory=datetime.now)
    subtotal: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    currency: str = "SGD"
    culture: str = "en-SG"
