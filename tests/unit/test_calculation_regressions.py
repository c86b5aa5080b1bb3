"""Regression coverage ensuring calculator outputs stay stable."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from invoicecalc.backend.app.services.calculation_service import calculate_invoice

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


@pytest.mark.parametrize(
    "scenario",
    json.loads(_DATA_PATH.read_text("utf-8")),
    ids=lambda item: item["name"],
)
def test_calculate_invoice_matches_regression_scenario(scenario: dict[str, object]) -> None:
    """The calculation service returns the expected totals for known payloads."""

    result = calculate_invoice(scenario["payload"])

    assert result["totals"] == scenario["expectations"]
