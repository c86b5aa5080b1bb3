"""Utility helpers for calculator modules."""

from __future__ import annotations

from contextlib import AbstractContextManager
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Any

from invoicecalc.backend.app.errors import InvalidArgumentError

CURRENCY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

# Products and sums of finite decimals never round under this context; only
# ``quantize`` does, and it cannot exceed the precision.
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    rounding=ROUND_HALF_UP,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def exact_arithmetic() -> AbstractContextManager[Context]:
    """Return a context manager in which monetary arithmetic is exact."""

    return localcontext(EXACT_CONTEXT)


def _coerce(value: Any, param_name: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgumentError("Value must be numeric", param_name)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidArgumentError("Value must be numeric", param_name) from exc
    raise InvalidArgumentError("Value must be numeric", param_name)


def to_decimal(value: Any, param_name: str) -> Decimal:
    """Return ``value`` as an exact, finite :class:`~decimal.Decimal`.

    Floats are converted through their shortest ``repr`` so ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary expansion.
    """

    result = _coerce(value, param_name)
    if not result.is_finite():
        raise InvalidArgumentError("Value must be a finite number", param_name)
    return result


def line_amount(quantity: Any, unit_price: Any, param_name: str = "items") -> Decimal:
    """Return ``quantity * unit_price`` with both operands coerced first."""

    quantity = to_decimal(quantity, param_name)
    unit_price = to_decimal(unit_price, param_name)
    with exact_arithmetic():
        return quantity * unit_price


def round_currency(value: Decimal) -> Decimal:
    """Round monetary amounts to two decimals, halves away from zero."""

    with exact_arithmetic():
        return value.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def format_percentage(value: Decimal) -> str:
    """Return a human-readable label for a percentage ``value`` such as ``7.0``."""

    if value == value.to_integral_value():
        return f"{int(value)}%"
    return f"{value.normalize():f}%"
