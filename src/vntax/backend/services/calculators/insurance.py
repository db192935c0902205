"""Compulsory insurance contribution helpers."""

from __future__ import annotations

from vntax.backend.amounts import round_half_up
from vntax.backend.config.schema import ConfigurationError
from vntax.backend.models import InsuranceBaseSelection, InsuranceResult


class InsuranceCalculator:
    """Derive employee and employer contributions from an insurance base.

    Rates are percentages of the base amount.
    """

    def __init__(self, employee_rate: float, employer_rate: float) -> None:
        if employee_rate < 0 or employee_rate > 100:
            raise ConfigurationError("Employee insurance rate must be between 0 and 100")
        if employer_rate < 0 or employer_rate > 100:
            raise ConfigurationError("Employer insurance rate must be between 0 and 100")
        self._employee_rate = employee_rate
        self._employer_rate = employer_rate

    @property
    def employee_rate(self) -> float:
        return self._employee_rate

    @property
    def employer_rate(self) -> float:
        return self._employer_rate

    def compute_base(self, selection: InsuranceBaseSelection, gross_salary: float) -> float:
        if selection.kind == "percentage":
            return round_half_up(gross_salary * selection.value / 100)
        return selection.value

    @staticmethod
    def compute_contribution(base_amount: float, rate: float) -> int:
        return round_half_up(base_amount * rate / 100)

    def employee_contribution(self, base_amount: float) -> int:
        return self.compute_contribution(base_amount, self._employee_rate)

    def employer_contribution(self, base_amount: float) -> int:
        return self.compute_contribution(base_amount, self._employer_rate)

    def calculate(
        self, selection: InsuranceBaseSelection, gross_salary: float
    ) -> InsuranceResult:
        base_amount = self.compute_base(selection, gross_salary)
        employee = self.employee_contribution(base_amount)
        employer = self.employer_contribution(base_amount)
        return InsuranceResult(
            base_amount=base_amount,
            employee_contribution=employee,
            employer_contribution=employer,
            total_contribution=employee + employer,
        )


__all__ = ["InsuranceCalculator"]
