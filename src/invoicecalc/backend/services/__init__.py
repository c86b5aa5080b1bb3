"""Service-layer helpers for the invoicecalc backend."""

from invoicecalc.backend.app.services.calculation_service import calculate_invoice

from .request_parser import normalise_culture, parse_invoice_payload
from .response_builder import build_invoice_response

__all__ = [
    "calculate_invoice",
    "normalise_culture",
    "parse_invoice_payload",
    "build_invoice_response",
]
