"""Pydantic models describing the public API surface."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

__all__ = [
    "ClientInput",
    "InvoiceItemInput",
    "InvoiceRequest",
    "InvoiceItemResult",
    "InvoiceSummary",
    "InvoiceTotals",
    "ResponseMeta",
    "InvoiceCalculationResponse",
    "format_validation_error",
]


class ClientInput(BaseModel):
    """Client details supplied with an invoice."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""


class InvoiceItemInput(BaseModel):
    """A line item as submitted by API clients.

    Quantities and prices may be negative so that callers can express credits;
    prices are limited to the currency's two minor-unit places.
    """

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    quantity: int
    unit_price: Decimal = Field(..., decimal_places=2)


class InvoiceRequest(BaseModel):
    """Top-level payload accepted by the invoice calculation endpoint."""

    model_config = ConfigDict(extra="forbid")

    invoice_id: str = ""
    client: ClientInput = Field(default_factory=ClientInput)
    items: list[InvoiceItemInput] | None = Field(default_factory=list)
    tax_rate: Decimal | None = None
    tax_preset: str | None = None
    currency: str | None = None
    culture: str | None = None
    invoice_date: date | None = None

    @field_validator("currency", mode="before")
    @classmethod
    def _normalise_currency(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped = value.strip().upper()
            return stripped or None
        return value

    @field_validator("tax_preset", "culture", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value


class InvoiceItemResult(BaseModel):
    """A line item echoed back with its computed line total."""

    model_config = ConfigDict(extra="forbid")

    description: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class InvoiceSummary(BaseModel):
    """Identity and carried attributes of the calculated invoice."""

    model_config = ConfigDict(extra="forbid")

    invoice_id: str
    client: ClientInput
    currency: str
    culture: str
    tax_rate: Decimal
    invoice_date: date


class InvoiceTotals(BaseModel):
    """The three figures written by the calculation engine."""

    model_config = ConfigDict(extra="forbid")

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    tax_rate_source: Literal["request", "preset", "default"]
    tax_rate_label: str
    tax_preset: str | None = None


class InvoiceCalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    invoice: InvoiceSummary
    items: list[InvoiceItemResult]
    totals: InvoiceTotals
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid invoice payload: {details}"
