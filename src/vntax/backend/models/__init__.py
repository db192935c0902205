"""Typed inputs and derived results shared across the calculators.

Request validation uses Pydantic models (see :mod:`.api`); everything the
calculators derive is a frozen dataclass so results can be passed around and
compared without defensive copies. Breakdown entries reference the regime's
own :class:`TaxBracket` instances rather than copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from vntax.backend.config.schema import TaxBracket

from .api import (
    CalculationRequest,
    ComparisonResponse,
    InsuranceBaseInput,
    InsuranceSummary,
    RegimeResult,
    SalaryDifference,
    TaxBreakdownEntry,
    format_validation_error,
)

SalaryType = Literal["gross", "net"]
InsuranceBaseKind = Literal["basic", "specific", "percentage"]

SALARY_TYPES: tuple[str, ...] = ("gross", "net")
INSURANCE_BASE_KINDS: tuple[str, ...] = ("basic", "specific", "percentage")

__all__ = [
    "INSURANCE_BASE_KINDS",
    "SALARY_TYPES",
    "CalculationRequest",
    "CalculationResult",
    "ComparisonResponse",
    "InsuranceBaseInput",
    "InsuranceBaseKind",
    "InsuranceBaseSelection",
    "InsuranceResult",
    "InsuranceSummary",
    "ProgressiveTaxResult",
    "RegimeResult",
    "SalaryDifference",
    "SalaryType",
    "TaxBreakdownEntry",
    "TaxBreakdownItem",
    "format_validation_error",
]


@dataclass(frozen=True, slots=True)
class InsuranceBaseSelection:
    """Which amount insurance percentages are applied to.

    ``basic`` and ``specific`` carry a fixed amount; ``percentage`` carries a
    percentage of the gross salary.
    """

    kind: InsuranceBaseKind
    value: float

    def __post_init__(self) -> None:
        if self.kind not in INSURANCE_BASE_KINDS:
            raise ValueError(f"Unknown insurance base type '{self.kind}'")
        if self.value < 0:
            raise ValueError("Insurance base value must be non-negative")

    @classmethod
    def basic(cls, amount: float) -> InsuranceBaseSelection:
        return cls("basic", amount)

    @classmethod
    def specific(cls, amount: float) -> InsuranceBaseSelection:
        return cls("specific", amount)

    @classmethod
    def percentage(cls, percent: float) -> InsuranceBaseSelection:
        return cls("percentage", percent)


@dataclass(frozen=True, slots=True)
class InsuranceResult:
    base_amount: float
    employee_contribution: int
    employer_contribution: int
    total_contribution: int


@dataclass(frozen=True, slots=True)
class TaxBreakdownItem:
    """Income taxed inside one bracket and the (rounded) tax it produced."""

    bracket: TaxBracket
    taxable_amount: float
    tax_amount: int


@dataclass(frozen=True, slots=True)
class ProgressiveTaxResult:
    total_tax: int
    breakdown: tuple[TaxBreakdownItem, ...]

    @property
    def taxed_income(self) -> float:
        return sum(item.taxable_amount for item in self.breakdown)


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Complete outcome of one taxpayer calculation."""

    salary_type: SalaryType
    dependents: int
    gross_salary: float
    net_salary: float
    taxable_income: float
    total_tax: int
    insurance: InsuranceResult
    tax_breakdown: tuple[TaxBreakdownItem, ...]
    total_employer_cost: float

    def as_dict(self) -> dict[str, Any]:
        """Return a serialisable payload mirroring :class:`RegimeResult` fields."""

        return {
            "salary_type": self.salary_type,
            "dependents": self.dependents,
            "gross_salary": self.gross_salary,
            "net_salary": self.net_salary,
            "taxable_income": self.taxable_income,
            "total_tax": self.total_tax,
            "insurance": {
                "base_amount": self.insurance.base_amount,
                "employee_contribution": self.insurance.employee_contribution,
                "employer_contribution": self.insurance.employer_contribution,
                "total_contribution": self.insurance.total_contribution,
            },
            "tax_breakdown": [
                {
                    **item.bracket.as_dict(),
                    "formatted_rate": item.bracket.formatted_rate,
                    "taxable_amount": item.taxable_amount,
                    "tax_amount": item.tax_amount,
                }
                for item in self.tax_breakdown
            ],
            "total_employer_cost": self.total_employer_cost,
        }
