"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class ProblemResponse:
    """JSON error payload returned by every endpoint on failure."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the serialisable payload for this problem response."""

        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; keyword extras are merged into the body."""

    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=status, message=message, extra=additional)


def invalid_argument_problem(error: InvalidArgumentError) -> ProblemResponse:
    """Describe an engine argument error, naming the offending parameter."""

    return problem_response(
        "invalid_argument",
        status=400,
        message=error.reason,
        parameter=error.param_name,
    )


__all__ = ["ProblemResponse", "invalid_argument_problem", "problem_response"]
