"""Helpers for normalising incoming invoice calculation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def normalise_culture(value: str | None) -> str | None:
    """Return ``value`` as an ``ll-CC`` culture tag, or ``None`` when blank.

    ``en_sg`` and ``EN-sg`` both become ``en-SG``; bare language tags such as
    ``en`` are lower-cased and returned as-is.
    """

    if not value:
        return None

    cleaned = value.strip().replace("_", "-")
    if not cleaned:
        return None

    language, _, region = cleaned.partition("-")
    if region:
        return f"{language.lower()}-{region.upper()}"
    return language.lower()


def _resolve_culture(req: Request, payload: dict[str, Any]) -> None:
    """Populate the culture field in ``payload`` based on hints in ``req``."""

    culture = payload.get("culture")
    if isinstance(culture, str) and culture.strip():
        payload["culture"] = normalise_culture(culture)
        return

    culture_param = req.args.get("culture")
    if culture_param:
        payload["culture"] = normalise_culture(culture_param)
        return

    accept_language = req.headers.get("Accept-Language")
    if accept_language:
        primary = accept_language.split(",")[0].split(";")[0].strip()
        if primary and primary != "*":
            payload["culture"] = normalise_culture(primary)


def parse_invoice_payload(req: Request) -> dict[str, Any]:
    """Extract and validate a JSON payload from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    _resolve_culture(req, payload)

    return payload
