"""Gross/net salary reconciliation for a single taxpayer."""

from __future__ import annotations

import logging

from vntax.backend.amounts import round_half_up
from vntax.backend.config.schema import TaxBracket
from vntax.backend.models import (
    CalculationResult,
    InsuranceBaseSelection,
    SalaryType,
)

from .insurance import InsuranceCalculator
from .progressive import ProgressiveTaxCalculator

_LOGGER = logging.getLogger(__name__)

MAX_SOLVER_ITERATIONS = 100
SOLVER_TOLERANCE = 1


class Taxpayer:
    """A taxpayer's dependants and insurance base bound to one regime's calculators."""

    def __init__(
        self,
        insurance_calculator: InsuranceCalculator,
        tax_calculator: ProgressiveTaxCalculator,
        dependents: int,
        insurance_base: InsuranceBaseSelection,
    ) -> None:
        if dependents < 0:
            raise ValueError("Number of dependents must be non-negative")
        self._insurance_calculator = insurance_calculator
        self._tax_calculator = tax_calculator
        self.dependents = dependents
        self.insurance_base = insurance_base

    def calculate_from_gross(
        self, gross_salary: float, salary_type: SalaryType = "gross"
    ) -> CalculationResult:
        if gross_salary < 0:
            raise ValueError("Gross salary must be non-negative")

        insurance = self._insurance_calculator.calculate(self.insurance_base, gross_salary)
        taxable_income, tax = self._tax_calculator.calculate_from_gross(
            gross_salary, self.dependents, insurance.employee_contribution
        )

        net_salary = gross_salary - insurance.employee_contribution - tax.total_tax
        total_employer_cost = gross_salary + insurance.employer_contribution

        return CalculationResult(
            salary_type=salary_type,
            dependents=self.dependents,
            gross_salary=gross_salary,
            net_salary=net_salary,
            taxable_income=taxable_income,
            total_tax=tax.total_tax,
            insurance=insurance,
            tax_breakdown=tax.breakdown,
            total_employer_cost=total_employer_cost,
        )

    def calculate_from_net(self, target_net_salary: float) -> CalculationResult:
        """Find the gross salary whose net pay matches ``target_net_salary``.

        Bisects over whole-unit gross salaries between the target and twice the
        target, relying on net pay never decreasing as gross pay grows. When no
        gross salary lands within one unit after the iteration cap, the result
        for the last midpoint is returned as an approximation. A target below
        what the fixed basic insurance contribution allows (100,000 on the
        basic base, say) ends at gross ``2 * target`` with a negative net, so
        callers should check the WARNING log or the returned net.
        """

        if target_net_salary < 0:
            raise ValueError("Net salary must be non-negative")

        low = target_net_salary
        high = target_net_salary * 2

        for iteration in range(1, MAX_SOLVER_ITERATIONS + 1):
            mid = round_half_up((low + high) / 2)
            result = self.calculate_from_gross(mid, salary_type="net")

            if abs(result.net_salary - target_net_salary) < SOLVER_TOLERANCE:
                _LOGGER.debug(
                    "Solved net %s -> gross %s in %d iteration(s)",
                    target_net_salary,
                    mid,
                    iteration,
                )
                return result

            if result.net_salary < target_net_salary:
                low = mid
            else:
                high = mid

        closest = round_half_up((low + high) / 2)
        _LOGGER.warning(
            "Net salary solver did not converge for target %s after %d iterations; "
            "returning gross %s",
            target_net_salary,
            MAX_SOLVER_ITERATIONS,
            closest,
        )
        return self.calculate_from_gross(closest, salary_type="net")

    def calculate(self, salary: float, salary_type: SalaryType) -> CalculationResult:
        if salary_type == "gross":
            return self.calculate_from_gross(salary)
        if salary_type == "net":
            return self.calculate_from_net(salary)
        raise ValueError(f"Unknown salary type '{salary_type}'")

    @property
    def brackets(self) -> tuple[TaxBracket, ...]:
        return self._tax_calculator.brackets

    @property
    def insurance_rates(self) -> dict[str, float]:
        return {
            "employee": self._insurance_calculator.employee_rate,
            "employer": self._insurance_calculator.employer_rate,
        }

    @property
    def deductions(self) -> dict[str, float]:
        return {
            "personal": self._tax_calculator.personal_deduction,
            "dependent": self._tax_calculator.dependent_deduction,
            "total_dependents": self.dependents * self._tax_calculator.dependent_deduction,
        }


__all__ = ["MAX_SOLVER_ITERATIONS", "SOLVER_TOLERANCE", "Taxpayer"]
