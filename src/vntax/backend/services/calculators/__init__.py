"""Domain-specific calculation helpers."""

from .factory import create_taxpayer
from .insurance import InsuranceCalculator
from .progressive import ProgressiveTaxCalculator
from .taxpayer import MAX_SOLVER_ITERATIONS, SOLVER_TOLERANCE, Taxpayer

__all__ = [
    "InsuranceCalculator",
    "MAX_SOLVER_ITERATIONS",
    "ProgressiveTaxCalculator",
    "SOLVER_TOLERANCE",
    "Taxpayer",
    "create_taxpayer",
]
