"""Utilities for validating regime configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Sequence

from .regime_config import (
    ConfigurationError,
    DeductionAmounts,
    InsuranceRates,
    RegimeConfiguration,
    TaxBracket,
    available_regimes,
    load_regime_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_brackets(brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []
    scope = "tax_brackets"

    if not brackets:
        errors.append(_format_scope(scope, "no tax brackets defined"))
        return errors

    if brackets[0].lower_bound != 0:
        errors.append(
            _format_scope(
                scope,
                f"first bracket starts at {brackets[0].lower_bound:g} instead of 0",
            )
        )

    previous_rate: float | None = None
    for index, bracket in enumerate(brackets):
        if previous_rate is not None and bracket.rate < previous_rate:
            errors.append(
                _format_scope(
                    f"{scope}[{index}]",
                    f"rate {bracket.formatted_rate} is lower than the preceding bracket",
                )
            )
        previous_rate = bracket.rate

    open_ended = [bracket for bracket in brackets if bracket.is_open_ended]
    if len(open_ended) != 1:
        errors.append(
            _format_scope(scope, "exactly one open-ended bracket must be defined")
        )

    return errors


def _validate_insurance(insurance: InsuranceRates) -> list[str]:
    errors: list[str] = []

    for label, value in {
        "employee": insurance.employee_rate,
        "employer": insurance.employer_rate,
    }.items():
        if value < 0 or value > 100:
            errors.append(
                _format_scope(
                    "insurance",
                    f"{label} rate {value} must be between 0 and 100",
                )
            )

    if insurance.basic_base <= 0:
        errors.append(_format_scope("insurance", "basic base must be positive"))

    return errors


def _validate_deductions(deductions: DeductionAmounts) -> list[str]:
    errors: list[str] = []

    if deductions.personal <= 0:
        errors.append(_format_scope("deductions", "personal deduction must be positive"))
    if deductions.dependent < 0:
        errors.append(
            _format_scope("deductions", "dependent deduction must be non-negative")
        )

    return errors


def validate_regime_configuration(config: RegimeConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    if not config.label.strip():
        errors.append(_format_scope("label", "regime label must not be empty"))

    errors.extend(_validate_brackets(config.brackets))
    errors.extend(_validate_insurance(config.insurance))
    errors.extend(_validate_deductions(config.deductions))

    return errors


def validate_all_regimes(regimes: Sequence[str] | None = None) -> dict[str, list[str]]:
    """Validate all configured regimes and return issues keyed by regime id."""

    targets = regimes or available_regimes()
    results: dict[str, list[str]] = {}

    for regime_id in targets:
        config = load_regime_configuration(regime_id)
        results[regime_id] = validate_regime_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Validate configured tax regimes and report issues helpful to contributors."
        )
    )
    parser.add_argument(
        "regimes",
        nargs="*",
        help="Specific regime identifiers to validate (defaults to all configured regimes)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    regimes = args.regimes or available_regimes()

    if not regimes:
        parser.print_help()
        return 1

    exit_code = 0

    for regime_id in regimes:
        try:
            config = load_regime_configuration(regime_id)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{regime_id}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_regime_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{regime_id}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{regime_id}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
