"""REST endpoints for invoice calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from invoicecalc.backend.app.services.calculation_service import calculate_invoice
from invoicecalc.backend.services.request_parser import parse_invoice_payload
from invoicecalc.backend.services.response_builder import build_invoice_response

blueprint = Blueprint("invoices", __name__, url_prefix="/api/v1/invoices")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Calculate subtotal, tax and total for the submitted invoice."""

    payload = parse_invoice_payload(request)
    result = calculate_invoice(payload)

    return build_invoice_response(result)
