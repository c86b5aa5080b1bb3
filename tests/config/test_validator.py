from pathlib import Path

import pytest

from invoicecalc.backend.config.schema import CurrencyConfig, TaxPreset
from invoicecalc.backend.config.settings import load_settings
from invoicecalc.backend.config.validator import main, validate_settings


def test_current_settings_are_valid() -> None:
    assert validate_settings(load_settings()) == []


def test_validator_flags_unknown_default_currency() -> None:
    settings = load_settings()
    broken = settings.model_copy(
        update={"defaults": settings.defaults.model_copy(update={"currency": "JPY"})}
    )

    errors = validate_settings(broken)

    assert any("defaults.currency" in error and "JPY" in error for error in errors)


def test_validator_flags_culture_mismatch() -> None:
    settings = load_settings()
    broken = settings.model_copy(
        update={"defaults": settings.defaults.model_copy(update={"culture": "en-US"})}
    )

    errors = validate_settings(broken)

    assert any("defaults.culture" in error for error in errors)


def test_validator_flags_duplicate_entries() -> None:
    settings = load_settings()
    broken = settings.model_copy(
        update={
            "currencies": settings.currencies
            + (CurrencyConfig(code="SGD", culture="en-SG"),),
            "tax_presets": settings.tax_presets
            + (TaxPreset(id="sg_gst", label="Duplicate", rate="9"),),
        }
    )

    errors = validate_settings(broken)

    assert any("duplicate currency codes" in error and "SGD" in error for error in errors)
    assert any("duplicate preset identifiers" in error for error in errors)


def test_validator_flags_blank_preset_label() -> None:
    settings = load_settings()
    broken = settings.model_copy(
        update={"tax_presets": (TaxPreset(id="blank", label="  ", rate="5"),)}
    )

    assert validate_settings(broken) == ["tax_presets.blank: label is empty"]


def test_main_reports_ok_for_shipped_settings(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0

    assert "OK" in capsys.readouterr().out


def test_main_reports_load_failures(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("defaults: {}\n", encoding="utf-8")

    assert main([str(path)]) == 1

    assert "failed to load settings" in capsys.readouterr().out


def test_main_reports_consistency_issues(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "inconsistent.yaml"
    path.write_text(
        "defaults:\n"
        "  currency: EUR\n"
        "  culture: de-DE\n"
        '  tax_rate: "19"\n'
        "currencies:\n"
        "  - code: USD\n"
        "    culture: en-US\n",
        encoding="utf-8",
    )

    assert main([str(path)]) == 1

    output = capsys.readouterr().out
    assert "1 issue(s) detected" in output
    assert "defaults.currency" in output
