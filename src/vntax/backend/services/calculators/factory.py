"""Wire calculators from a regime configuration."""

from __future__ import annotations

from vntax.backend.config.schema import RegimeConfiguration
from vntax.backend.models import InsuranceBaseSelection

from .insurance import InsuranceCalculator
from .progressive import ProgressiveTaxCalculator
from .taxpayer import Taxpayer


def create_taxpayer(
    regime: RegimeConfiguration,
    dependents: int,
    insurance_base: InsuranceBaseSelection,
) -> Taxpayer:
    """Return a :class:`Taxpayer` bound to ``regime``'s rates and brackets."""

    insurance_calculator = InsuranceCalculator(
        regime.employee_insurance_rate,
        regime.employer_insurance_rate,
    )
    tax_calculator = ProgressiveTaxCalculator(
        regime.personal_deduction,
        regime.dependent_deduction,
        regime.brackets,
    )
    return Taxpayer(insurance_calculator, tax_calculator, dependents, insurance_base)


__all__ = ["create_taxpayer"]
