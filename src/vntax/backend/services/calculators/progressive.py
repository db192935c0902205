"""Progressive income tax over a contiguous bracket table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from vntax.backend.config.schema import ConfigurationError, TaxBracket, order_brackets
from vntax.backend.models import ProgressiveTaxResult, TaxBreakdownItem


def _coerce_bracket(bracket: TaxBracket | Mapping[str, Any]) -> TaxBracket:
    if isinstance(bracket, TaxBracket):
        return bracket
    if isinstance(bracket, Mapping):
        return TaxBracket.model_validate(bracket)
    raise ConfigurationError("Tax brackets must be TaxBracket instances or mappings")


class ProgressiveTaxCalculator:
    """Apply family-circumstance deductions and the progressive bracket table."""

    def __init__(
        self,
        personal_deduction: float,
        dependent_deduction: float,
        brackets: Iterable[TaxBracket | Mapping[str, Any]],
    ) -> None:
        if personal_deduction < 0:
            raise ConfigurationError("Personal deduction must be non-negative")
        if dependent_deduction < 0:
            raise ConfigurationError("Dependent deduction must be non-negative")
        self.personal_deduction = personal_deduction
        self.dependent_deduction = dependent_deduction
        self._brackets = order_brackets(_coerce_bracket(entry) for entry in brackets)

    @property
    def brackets(self) -> tuple[TaxBracket, ...]:
        return self._brackets

    def total_deductions(self, dependents: int, insurance_contribution: float) -> float:
        if dependents < 0:
            raise ValueError("Number of dependents must be non-negative")
        if insurance_contribution < 0:
            raise ValueError("Insurance contribution must be non-negative")
        return (
            self.personal_deduction
            + dependents * self.dependent_deduction
            + insurance_contribution
        )

    def taxable_income(
        self, gross_salary: float, dependents: int, insurance_contribution: float
    ) -> float:
        if gross_salary < 0:
            raise ValueError("Gross salary must be non-negative")
        deductions = self.total_deductions(dependents, insurance_contribution)
        return max(0, gross_salary - deductions)

    def progressive_tax(self, taxable_income: float) -> ProgressiveTaxResult:
        """Allocate ``taxable_income`` across the brackets, lowest first.

        Each bracket's tax is rounded on its own before summing, so the total
        can differ by a unit from rounding the unrounded sum.
        """

        if taxable_income < 0:
            raise ValueError("Taxable income must be non-negative")

        remaining = taxable_income
        total_tax = 0
        breakdown: list[TaxBreakdownItem] = []

        for bracket in self._brackets:
            if remaining <= 0:
                break

            taxable_in_bracket = min(remaining, bracket.size)
            tax_in_bracket = bracket.tax_for(taxable_in_bracket)
            breakdown.append(
                TaxBreakdownItem(
                    bracket=bracket,
                    taxable_amount=taxable_in_bracket,
                    tax_amount=tax_in_bracket,
                )
            )
            total_tax += tax_in_bracket
            remaining -= taxable_in_bracket

        return ProgressiveTaxResult(total_tax=total_tax, breakdown=tuple(breakdown))

    def calculate_from_gross(
        self, gross_salary: float, dependents: int, insurance_contribution: float
    ) -> tuple[float, ProgressiveTaxResult]:
        """Return ``(taxable_income, progressive_result)`` for ``gross_salary``."""

        taxable = self.taxable_income(gross_salary, dependents, insurance_contribution)
        return taxable, self.progressive_tax(taxable)

    def bracket_for_income(self, income: float) -> TaxBracket | None:
        return next(
            (bracket for bracket in self._brackets if bracket.contains(income)), None
        )


__all__ = ["ProgressiveTaxCalculator"]
