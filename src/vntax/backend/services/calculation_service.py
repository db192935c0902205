"""Orchestrate request validation, regime loading and salary comparisons.

The calculation service runs one salary input through the baseline and the
comparison regime declared in the configuration manifest and reports both
results together with their differences. Profiling hooks and request
validation live here so callers get a single ``calculate_comparison`` entry
point that accepts plain mappings.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from vntax.backend.config.regime_config import RegimeConfiguration, comparison_regimes
from vntax.backend.models import (
    CalculationRequest,
    CalculationResult,
    ComparisonResponse,
    InsuranceBaseSelection,
    format_validation_error,
)
from vntax.backend.version import get_project_version

from .calculators import create_taxpayer

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("VNTAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate_request(payload: Mapping[str, Any] | CalculationRequest) -> CalculationRequest:
    if isinstance(payload, CalculationRequest):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return CalculationRequest.model_validate(data)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _insurance_selection(
    request: CalculationRequest, regime: RegimeConfiguration
) -> InsuranceBaseSelection:
    base = request.insurance_base
    if base.type == "basic" and base.value is None:
        return InsuranceBaseSelection.basic(regime.basic_insurance_base)
    return InsuranceBaseSelection(base.type, base.value or 0.0)


def calculate_for_regime(
    request: CalculationRequest, regime: RegimeConfiguration
) -> CalculationResult:
    """Run ``request`` through a single regime."""

    taxpayer = create_taxpayer(
        regime, request.dependents, _insurance_selection(request, regime)
    )
    return taxpayer.calculate(request.salary, request.salary_type)


def _difference(baseline: CalculationResult, comparison: CalculationResult) -> dict[str, float]:
    return {
        "gross_salary": comparison.gross_salary - baseline.gross_salary,
        "net_salary": comparison.net_salary - baseline.net_salary,
        "taxable_income": comparison.taxable_income - baseline.taxable_income,
        "total_tax": comparison.total_tax - baseline.total_tax,
        "employee_insurance": (
            comparison.insurance.employee_contribution
            - baseline.insurance.employee_contribution
        ),
        "total_employer_cost": (
            comparison.total_employer_cost - baseline.total_employer_cost
        ),
    }


def calculate_comparison(
    payload: Mapping[str, Any] | CalculationRequest,
) -> dict[str, Any]:
    """Compare the salary in ``payload`` under the baseline and comparison regimes."""

    request = _validate_request(payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    baseline, comparison = comparison_regimes()

    results: dict[str, CalculationResult] = {}
    for regime in (baseline, comparison):
        with _profile_section(regime.id, timings):
            results[regime.id] = calculate_for_regime(request, regime)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_comparison timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    labels = {baseline.id: baseline.label, comparison.id: comparison.label}
    response_model = ComparisonResponse.model_validate(
        {
            "results": {
                regime_id: {"regime": regime_id, "label": labels[regime_id], **result.as_dict()}
                for regime_id, result in results.items()
            },
            "difference": _difference(results[baseline.id], results[comparison.id]),
            "meta": {
                "baseline": baseline.id,
                "comparison": comparison.id,
                "salary_type": request.salary_type,
                "dependents": request.dependents,
                "insurance_base": request.insurance_base.model_dump(),
                "version": get_project_version(),
            },
        }
    )

    return response_model.model_dump(mode="json", by_alias=True)


__all__ = ["calculate_comparison", "calculate_for_regime"]
