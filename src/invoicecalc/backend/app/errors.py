"""Argument errors raised by the invoice calculation engine."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when an argument handed to the engine is unusable.

    ``param_name`` identifies the offending argument and ``reason`` carries the
    human-readable explanation. Both are surfaced verbatim to API clients.
    """

    def __init__(self, reason: str, param_name: str) -> None:
        self.reason = reason
        self.param_name = param_name
        super().__init__(f"{reason} (parameter '{param_name}')")


class MissingArgumentError(InvalidArgumentError):
    """Raised when a required argument is ``None``."""

    def __init__(self, param_name: str, reason: str = "Value cannot be None") -> None:
        super().__init__(reason, param_name)


class ArgumentRangeError(InvalidArgumentError):
    """Raised when a numeric argument falls outside its documented bounds."""


__all__ = ["ArgumentRangeError", "InvalidArgumentError", "MissingArgumentError"]
