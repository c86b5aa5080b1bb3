"""Utilities for validating invoice settings and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from .settings import ConfigurationError, Settings, load_settings_file, settings_path


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _duplicates(values: Iterable[str]) -> list[str]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def _validate_currencies(settings: Settings) -> list[str]:
    errors: list[str] = []

    duplicates = _duplicates(currency.code for currency in settings.currencies)
    if duplicates:
        errors.append(
            _format_scope("currencies", f"duplicate currency codes detected: {duplicates}")
        )

    return errors


def _validate_tax_presets(settings: Settings) -> list[str]:
    errors: list[str] = []

    duplicates = _duplicates(preset.id for preset in settings.tax_presets)
    if duplicates:
        errors.append(
            _format_scope("tax_presets", f"duplicate preset identifiers detected: {duplicates}")
        )

    for preset in settings.tax_presets:
        if not preset.label.strip():
            errors.append(_format_scope(f"tax_presets.{preset.id}", "label is empty"))

    return errors


def _validate_defaults(settings: Settings) -> list[str]:
    errors: list[str] = []
    defaults = settings.defaults

    try:
        currency = settings.get_currency(defaults.currency)
    except KeyError:
        errors.append(
            _format_scope(
                "defaults.currency",
                f"default currency {defaults.currency} is not present in the configured set",
            )
        )
        return errors

    if currency.culture != defaults.culture:
        errors.append(
            _format_scope(
                "defaults.culture",
                (
                    f"default culture {defaults.culture} does not match "
                    f"{currency.code} culture {currency.culture}"
                ),
            )
        )

    return errors


def validate_settings(settings: Settings) -> list[str]:
    """Return human-readable consistency issues detected in ``settings``."""

    errors: list[str] = []

    errors.extend(_validate_defaults(settings))
    errors.extend(_validate_currencies(settings))
    errors.extend(_validate_tax_presets(settings))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate invoice settings and report issues helpful to contributors."
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Settings file to validate (defaults to the active settings file)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    path: Path = args.path or settings_path()

    try:
        settings = load_settings_file(path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[{path.name}] failed to load settings: {error}")
        return 1

    issues = validate_settings(settings)
    if issues:
        print(f"[{path.name}] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"[{path.name}] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
