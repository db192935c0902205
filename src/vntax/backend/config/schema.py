"""Pydantic models describing the tax regime configuration schema."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from vntax.backend.amounts import format_percentage, round_half_up


ACTIVE_STATUS = "active"


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """A single progressive tax bracket covering ``[from, to)``.

    ``rate`` is expressed as a percentage (``5`` means five percent). A missing
    upper bound marks the open-ended top bracket.
    """

    lower_bound: float = Field(alias="from")
    upper_bound: float | None = Field(default=None, alias="to")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.lower_bound < 0:
            raise ConfigurationError("Tax bracket 'from' must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= self.lower_bound:
            raise ConfigurationError("Tax bracket 'to' must be greater than 'from'")
        if self.rate < 0 or self.rate > 100:
            raise ConfigurationError("Tax rate must be between 0 and 100")
        return self

    @property
    def is_open_ended(self) -> bool:
        return self.upper_bound is None

    @property
    def size(self) -> float:
        """Width of the bracket; infinite for the open-ended top bracket."""

        if self.upper_bound is None:
            return math.inf
        return self.upper_bound - self.lower_bound

    @property
    def formatted_rate(self) -> str:
        return format_percentage(self.rate)

    def contains(self, income: float) -> bool:
        return income >= self.lower_bound and (
            self.upper_bound is None or income < self.upper_bound
        )

    def taxable_amount_for(self, income: float) -> float:
        """Portion of ``income`` that falls inside this bracket."""

        if income <= self.lower_bound:
            return 0.0
        return max(0.0, min(income - self.lower_bound, self.size))

    def tax_for(self, taxable_amount: float) -> int:
        """Tax owed on ``taxable_amount`` at this bracket's rate, rounded per bracket."""

        return round_half_up(taxable_amount * self.rate / 100)

    def tax_for_income(self, income: float) -> int:
        return self.tax_for(self.taxable_amount_for(income))

    def as_dict(self) -> dict[str, float | None]:
        return {"from": self.lower_bound, "to": self.upper_bound, "rate": self.rate}


def order_brackets(brackets: Iterable[TaxBracket]) -> tuple[TaxBracket, ...]:
    """Sort ``brackets`` by lower bound and enforce a contiguous, open-ended table."""

    ordered = tuple(sorted(brackets, key=lambda bracket: bracket.lower_bound))
    if not ordered:
        raise ConfigurationError("At least one tax bracket must be defined")

    for current, following in zip(ordered, ordered[1:]):
        if current.upper_bound is None:
            raise ConfigurationError("Only the final tax bracket may be open-ended")
        if current.upper_bound != following.lower_bound:
            raise ConfigurationError("Tax brackets must be continuous")

    if ordered[-1].upper_bound is not None:
        raise ConfigurationError("Final tax bracket must have an open upper bound")
    return ordered


class DeductionAmounts(ImmutableModel):
    """Monthly family-circumstance deductions."""

    personal: float
    dependent: float

    @model_validator(mode="after")
    def _validate_amounts(self) -> DeductionAmounts:
        if self.personal < 0:
            raise ConfigurationError("Personal deduction must be non-negative")
        if self.dependent < 0:
            raise ConfigurationError("Dependent deduction must be non-negative")
        return self


class InsuranceRates(ImmutableModel):
    """Compulsory insurance rates (percentages) and the statutory basic base."""

    employee_rate: float
    employer_rate: float
    basic_base: float

    @model_validator(mode="after")
    def _validate_rates(self) -> InsuranceRates:
        if self.employee_rate < 0 or self.employee_rate > 100:
            raise ConfigurationError("Employee insurance rate must be between 0 and 100")
        if self.employer_rate < 0 or self.employer_rate > 100:
            raise ConfigurationError("Employer insurance rate must be between 0 and 100")
        if self.basic_base < 0:
            raise ConfigurationError("Basic insurance base must be non-negative")
        return self


class RegimeConfiguration(ImmutableModel):
    """Structured representation of one set of tax law constants."""

    id: str
    label: str
    meta: Mapping[str, Any] = Field(default_factory=dict)
    deductions: DeductionAmounts
    insurance: InsuranceRates
    brackets: Sequence[TaxBracket] = Field(alias="tax_brackets")

    @field_validator("meta", mode="before")
    @classmethod
    def _default_meta(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")
        return value

    @model_validator(mode="after")
    def _validate_brackets(self) -> Self:
        object.__setattr__(self, "brackets", order_brackets(self.brackets))
        return self

    @property
    def personal_deduction(self) -> float:
        return self.deductions.personal

    @property
    def dependent_deduction(self) -> float:
        return self.deductions.dependent

    @property
    def employee_insurance_rate(self) -> float:
        return self.insurance.employee_rate

    @property
    def employer_insurance_rate(self) -> float:
        return self.insurance.employer_rate

    @property
    def basic_insurance_base(self) -> float:
        return self.insurance.basic_base


class RegimeManifestEntry(ImmutableModel):
    """Entry describing a supported regime in the manifest."""

    id: str
    filename: str | None = None
    status: str = ACTIVE_STATUS

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.id}.yaml"


class RegimeManifest(ImmutableModel):
    """Manifest describing the available regime configuration files."""

    regimes: Sequence[RegimeManifestEntry]
    baseline: str
    comparison: str

    @model_validator(mode="after")
    def _validate_regimes(self) -> RegimeManifest:
        seen: dict[str, RegimeManifestEntry] = {}
        for entry in self.regimes:
            if entry.id in seen:
                raise ConfigurationError(
                    f"Duplicate regime '{entry.id}' declared in the configuration manifest"
                )
            seen[entry.id] = entry
        for role, regime_id in (("baseline", self.baseline), ("comparison", self.comparison)):
            if regime_id not in seen:
                raise ConfigurationError(
                    f"Manifest {role} regime '{regime_id}' is not declared"
                )
            if not seen[regime_id].is_active:
                raise ConfigurationError(
                    f"Manifest {role} regime '{regime_id}' must be {ACTIVE_STATUS}"
                )
        if self.baseline == self.comparison:
            raise ConfigurationError("Baseline and comparison regimes must differ")
        return self

    def get_entry(self, regime_id: str) -> RegimeManifestEntry:
        for entry in self.regimes:
            if entry.id == regime_id:
                return entry
        raise KeyError(regime_id)

    @computed_field
    @property
    def active_regimes(self) -> tuple[str, ...]:
        return tuple(entry.id for entry in self.regimes if entry.is_active)


__all__ = [
    "ACTIVE_STATUS",
    "ConfigurationError",
    "DeductionAmounts",
    "ImmutableModel",
    "InsuranceRates",
    "RegimeConfiguration",
    "RegimeManifest",
    "RegimeManifestEntry",
    "TaxBracket",
    "ValidationError",
    "order_brackets",
]
