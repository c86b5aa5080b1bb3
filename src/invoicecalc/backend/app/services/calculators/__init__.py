"""Invoice calculation helpers."""

from .totals import (
    calculate_invoice_totals,
    calculate_subtotal,
    calculate_tax,
    calculate_total,
)
from .utils import (
    exact_arithmetic,
    format_percentage,
    line_amount,
    round_currency,
    to_decimal,
)

__all__ = [
    "calculate_invoice_totals",
    "calculate_subtotal",
    "calculate_tax",
    "calculate_total",
    "exact_arithmetic",
    "format_percentage",
    "line_amount",
    "round_currency",
    "to_decimal",
]
